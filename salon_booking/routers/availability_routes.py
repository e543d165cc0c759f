# salon_booking/routers/availability_routes.py

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from salon_booking.availability import get_available_dates, get_available_time_slots
from salon_booking.db import get_session
from salon_booking.schemas import AvailabilityResponse, AvailableDatesResponse

router = APIRouter(
    prefix="/availability",
    tags=["availability"],
)


@router.get("", response_model=AvailabilityResponse)
def availability(
    date: date,
    service_id: int,
    session: Session = Depends(get_session),
):
    slots = get_available_time_slots(session, date, service_id)
    return {"date": date, "service_id": service_id, "slots": slots}


@router.get("/dates", response_model=AvailableDatesResponse)
def available_dates(
    days: int = Query(30, ge=1, le=366),
    session: Session = Depends(get_session),
):
    min_date, max_date, dates = get_available_dates(session, date.today(), days)
    return {"min_date": min_date, "max_date": max_date, "dates": dates}
