# salon_booking/routers/business_hours_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from salon_booking.core import validate_time_range
from salon_booking.data import day_name
from salon_booking.db import get_session
from salon_booking.models import BusinessHour
from salon_booking.schemas import BusinessHourCreate, BusinessHourPublic, BusinessHourUpdate
from salon_booking.deps import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["business-hours"],
)


def to_public(hour: BusinessHour) -> dict:
    return {
        "id": hour.id,
        "day_of_week": hour.day_of_week,
        "day_name": day_name(hour.day_of_week),
        "start_time": hour.start_time,
        "end_time": hour.end_time,
    }


@router.get("/business-hours", response_model=List[BusinessHourPublic])
def list_business_hours(session: Session = Depends(get_session)):
    hours = session.exec(
        select(BusinessHour).order_by(BusinessHour.day_of_week, BusinessHour.start_time)
    ).all()
    return [to_public(h) for h in hours]


@router.post(
    "/admin/business-hours",
    response_model=BusinessHourPublic,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_business_hour(
    hour: BusinessHourCreate,
    session: Session = Depends(get_session),
):
    validate_time_range(hour.start_time, hour.end_time)

    db_hour = BusinessHour(**hour.model_dump())
    session.add(db_hour)
    session.commit()
    session.refresh(db_hour)
    logger.info(
        f"Business hours {db_hour.id} added: {day_name(db_hour.day_of_week)} "
        f"{db_hour.start_time:%H:%M}-{db_hour.end_time:%H:%M}"
    )
    return to_public(db_hour)


@router.put(
    "/admin/business-hours/{hour_id}",
    response_model=BusinessHourPublic,
    dependencies=[Depends(require_admin)],
)
def update_business_hour(
    hour_id: int,
    changes: BusinessHourUpdate,
    session: Session = Depends(get_session),
):
    db_hour = session.get(BusinessHour, hour_id)
    if db_hour is None:
        raise HTTPException(status_code=404, detail="Business hour not found")

    updates = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}
    validate_time_range(
        updates.get("start_time", db_hour.start_time),
        updates.get("end_time", db_hour.end_time),
    )
    for key, value in updates.items():
        setattr(db_hour, key, value)

    session.add(db_hour)
    session.commit()
    session.refresh(db_hour)
    logger.info(f"Business hours {hour_id} updated")
    return to_public(db_hour)


@router.delete(
    "/admin/business-hours/{hour_id}",
    status_code=204,
    dependencies=[Depends(require_admin)],
)
def delete_business_hour(
    hour_id: int,
    session: Session = Depends(get_session),
):
    db_hour = session.get(BusinessHour, hour_id)
    if db_hour is None:
        raise HTTPException(status_code=404, detail="Business hour not found")

    session.delete(db_hour)
    session.commit()
    logger.info(f"Business hours {hour_id} deleted")
