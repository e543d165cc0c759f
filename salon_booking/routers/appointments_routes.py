# salon_booking/routers/appointments_routes.py

import logging
from datetime import datetime, date
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from salon_booking.availability import find_conflicting_appointment, get_booking_settings, get_booking_window
from salon_booking.config import OCCUPYING_STATUSES
from salon_booking.core import validate_phone
from salon_booking.db import get_session
from salon_booking.models import Appointment, Service
from salon_booking.schemas import (
    AdminAppointmentCreate,
    AppointmentCreate,
    AppointmentPublic,
    AppointmentStatus,
    AppointmentStatusUpdate,
    VoiceParseRequest,
    VoiceParseResponse,
)
from salon_booking.deps import require_admin
from salon_booking.voice import parse_booking_request

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["appointments"],
)


def to_public(appt: Appointment, services: dict) -> dict:
    service = services.get(appt.service_id)
    return {
        "id": appt.id,
        "service_id": appt.service_id,
        "service": None if service is None else {
            "name": service.name,
            "duration_minutes": service.duration_minutes,
            "price": service.price,
        },
        "name": appt.name,
        "phone": appt.phone,
        "date": appt.date,
        "time": appt.time,
        "status": appt.status,
        "created_at": appt.created_at,
    }


def with_services(session: Session, appts: List[Appointment]) -> List[dict]:
    ids = {a.service_id for a in appts}
    services = {}
    if ids:
        services = {s.id: s for s in session.exec(select(Service).where(Service.id.in_(list(ids)))).all()}
    return [to_public(a, services) for a in appts]


def save_appointment(session: Session, appt: Appointment) -> Appointment:
    # an occupying appointment may not overlap another one
    if appt.status in OCCUPYING_STATUSES:
        # compare against stored rows, not the pending change
        with session.no_autoflush:
            conflict = find_conflicting_appointment(session, appt)
        if conflict is not None:
            raise HTTPException(
                status_code=409,
                detail=f"Overlaps {conflict.status} appointment {conflict.id} at {conflict.time:%H:%M}",
            )

    session.add(appt)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=409, detail="An accepted appointment already exists for that start time")

    session.refresh(appt)
    return appt


def build_appointment(session: Session, appt: AppointmentCreate, status: str) -> Appointment:
    # 1) Validate contact data
    phone = validate_phone(appt.phone)
    name = appt.name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Name is required")

    # 2) Validate service
    if session.get(Service, appt.service_id) is None:
        raise HTTPException(status_code=422, detail="Service not available")

    # 3) Prevent booking in the past (naive local time)
    if datetime.combine(appt.date, appt.time) < datetime.now():
        raise HTTPException(status_code=422, detail="Cannot book an appointment in the past")

    return Appointment(
        service_id=appt.service_id,
        name=name,
        phone=phone,
        date=appt.date,
        time=appt.time,
        status=status,
    )


@router.post("/appointments", response_model=AppointmentPublic, status_code=201)
def request_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
):
    """Customer booking request; always starts as pending."""
    db_appt = build_appointment(session, appt, AppointmentStatus.pending.value)

    min_date, max_date = get_booking_window(get_booking_settings(session), date.today())
    if not (min_date <= appt.date <= max_date):
        raise HTTPException(
            status_code=422,
            detail=f"Appointments can only be requested between {min_date} and {max_date}",
        )

    db_appt = save_appointment(session, db_appt)
    logger.info(f"Appointment {db_appt.id} requested for {db_appt.date} {db_appt.time:%H:%M}")
    return with_services(session, [db_appt])[0]


@router.get("/appointments", response_model=List[AppointmentPublic])
def appointments_by_phone(
    phone: str,
    session: Session = Depends(get_session),
):
    phone = validate_phone(phone)
    appts = session.exec(
        select(Appointment)
        .where(Appointment.phone == phone)
        .order_by(Appointment.date, Appointment.time)
    ).all()
    return with_services(session, appts)


@router.get(
    "/admin/appointments",
    response_model=List[AppointmentPublic],
    dependencies=[Depends(require_admin)],
)
def list_appointments(
    status: Optional[str] = "all",
    on_date: Optional[date] = None,
    session: Session = Depends(get_session),
):
    if status != "all" and status not in AppointmentStatus.__members__:
        raise HTTPException(status_code=422, detail="status must be 'pending', 'accepted', 'rejected', or 'all'")

    stmt = select(Appointment)
    if on_date is not None:
        stmt = stmt.where(Appointment.date == on_date)
    if status != "all":
        stmt = stmt.where(Appointment.status == status)

    # newest date first, then by time
    stmt = stmt.order_by(Appointment.date.desc(), Appointment.time)
    return with_services(session, session.exec(stmt).all())


@router.get(
    "/admin/appointments/{appt_id}",
    response_model=AppointmentPublic,
    dependencies=[Depends(require_admin)],
)
def get_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
):
    appt = session.get(Appointment, appt_id)
    if appt is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return with_services(session, [appt])[0]


@router.post(
    "/admin/appointments",
    response_model=AppointmentPublic,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_appointment(
    appt: AdminAppointmentCreate,
    session: Session = Depends(get_session),
):
    """Direct creation by staff, accepted unless told otherwise."""
    db_appt = build_appointment(session, appt, appt.status.value)
    db_appt = save_appointment(session, db_appt)
    logger.info(f"Appointment {db_appt.id} created by admin as {db_appt.status}")
    return with_services(session, [db_appt])[0]


@router.patch(
    "/admin/appointments/{appt_id}/status",
    response_model=AppointmentPublic,
    dependencies=[Depends(require_admin)],
)
def update_appointment_status(
    appt_id: int,
    update: AppointmentStatusUpdate,
    session: Session = Depends(get_session),
):
    target = session.get(Appointment, appt_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Appointment not found")

    previous = target.status
    target.status = update.status.value
    target = save_appointment(session, target)
    logger.info(f"Appointment {appt_id} status {previous} -> {target.status}")
    return with_services(session, [target])[0]


@router.post(
    "/admin/appointments/parse",
    response_model=VoiceParseResponse,
    dependencies=[Depends(require_admin)],
)
def parse_dictation(
    request: VoiceParseRequest,
    session: Session = Depends(get_session),
):
    services = session.exec(select(Service)).all()
    parsed = parse_booking_request(request.text, services, date.today())
    if parsed.is_empty():
        raise HTTPException(status_code=422, detail="Could not recognise any booking data")
    return parsed.as_dict()
