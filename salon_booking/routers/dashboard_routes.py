# salon_booking/routers/dashboard_routes.py

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlmodel import Session, select

from salon_booking.db import get_session
from salon_booking.models import Appointment, BusinessHour, Service
from salon_booking.schemas import DashboardResponse
from salon_booking.deps import require_admin

router = APIRouter(
    prefix="/admin/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=DashboardResponse)
def dashboard(session: Session = Depends(get_session)):
    by_status = dict(
        session.exec(
            select(Appointment.status, func.count(Appointment.id)).group_by(Appointment.status)
        ).all()
    )
    today_accepted = session.exec(
        select(func.count(Appointment.id))
        .where(Appointment.date == date.today())
        .where(Appointment.status == "accepted")
    ).one()

    return {
        "pending": by_status.get("pending", 0),
        "accepted": by_status.get("accepted", 0),
        "rejected": by_status.get("rejected", 0),
        "total": sum(by_status.values()),
        "today_accepted": today_accepted,
        "services": session.exec(select(func.count(Service.id))).one(),
        "business_hours": session.exec(select(func.count(BusinessHour.id))).one(),
    }
