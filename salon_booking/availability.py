# salon_booking/availability.py
"""
Slot availability for the booking page.

A day's bookable slots come from its business-hour blocks, walked on a
fixed grid (SLOT_MINUTES). A slot is offered when the requested service
fits before the block closes; it is marked unavailable when it overlaps an
occupying appointment or starts inside a partial schedule block.
"""

import logging
from datetime import datetime, date, timedelta
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta
from sqlmodel import Session, select

from salon_booking.config import DEFAULT_APPOINTMENT_MINUTES, OCCUPYING_STATUSES, SLOT_MINUTES
from salon_booking.core import at, overlaps, span
from salon_booking.data import DEFAULT_BOOKING_SETTINGS
from salon_booking.models import Appointment, BlockedSlot, BookingSettings, BusinessHour, Service
from salon_booking.schemas import TimeSlot

logger = logging.getLogger(__name__)


def service_durations(session: Session, service_ids: Iterable[int]) -> dict[int, int]:
    ids = set(service_ids)
    if not ids:
        return {}
    rows = session.exec(select(Service).where(Service.id.in_(list(ids)))).all()
    return {s.id: s.duration_minutes for s in rows}


def get_available_time_slots(
    session: Session,
    on_date: date,
    service_id: int,
    now: Optional[datetime] = None,
    occupying_statuses: Iterable[str] = OCCUPYING_STATUSES,
) -> List[TimeSlot]:
    """Return the grid slots for ``on_date`` with an availability flag.

    Empty when the day has no business hours, is blocked as a whole, or the
    service does not exist. Store errors propagate to the caller.
    """
    now = now or datetime.now()

    # 1) Business hours for that weekday (0=Mon)
    hours = session.exec(
        select(BusinessHour)
        .where(BusinessHour.day_of_week == on_date.weekday())
        .order_by(BusinessHour.start_time)
    ).all()
    if not hours:
        return []

    # 2) Schedule blocks; a block without times closes the whole day
    blocks = session.exec(select(BlockedSlot).where(BlockedSlot.date == on_date)).all()
    if any(b.start_time is None and b.end_time is None for b in blocks):
        return []
    partial_blocks = [
        (at(on_date, b.start_time), at(on_date, b.end_time))
        for b in blocks
        if b.start_time is not None and b.end_time is not None
    ]

    # 3) Service decides the occupancy width
    service = session.get(Service, service_id)
    if service is None:
        return []
    duration = timedelta(minutes=service.duration_minutes)

    # 4) Appointments that occupy time, each with its own service duration
    appts = session.exec(
        select(Appointment)
        .where(Appointment.date == on_date)
        .where(Appointment.status.in_(tuple(occupying_statuses)))
    ).all()
    durations = service_durations(session, (a.service_id for a in appts))
    busy = [
        span(on_date, a.time, durations.get(a.service_id, DEFAULT_APPOINTMENT_MINUTES))
        for a in appts
    ]

    # 5) Walk the grid inside each block
    step = timedelta(minutes=SLOT_MINUTES)
    slots = []
    for block in hours:
        current = at(on_date, block.start_time)
        block_end = at(on_date, block.end_time)
        while current + duration <= block_end:
            slot_end = current + duration

            if on_date == now.date() and current < now:
                current += step
                continue

            booked = any(overlaps(current, slot_end, b_start, b_end) for b_start, b_end in busy)
            blocked = any(b_start <= current < b_end for b_start, b_end in partial_blocks)

            slots.append((current, TimeSlot(time=current.strftime("%H:%M"), available=not (booked or blocked))))
            current += step

    # overlapping hour blocks are kept as-is, only ordered
    slots.sort(key=lambda pair: pair[0])
    return [slot for _, slot in slots]


def find_conflicting_appointment(
    session: Session,
    appointment: Appointment,
    occupying_statuses: Iterable[str] = OCCUPYING_STATUSES,
) -> Optional[Appointment]:
    """Return an occupying appointment whose interval overlaps ``appointment``.

    Same notion of occupancy as ``get_available_time_slots``. The check reads
    committed rows only, so two concurrent writers with different start times
    can both pass it; the store index only rejects identical accepted starts.
    """
    others = session.exec(
        select(Appointment)
        .where(Appointment.date == appointment.date)
        .where(Appointment.status.in_(tuple(occupying_statuses)))
    ).all()
    others = [a for a in others if a.id != appointment.id]
    if not others:
        return None

    durations = service_durations(session, [appointment.service_id] + [a.service_id for a in others])
    start, end = span(
        appointment.date,
        appointment.time,
        durations.get(appointment.service_id, DEFAULT_APPOINTMENT_MINUTES),
    )
    for other in others:
        o_start, o_end = span(other.date, other.time, durations.get(other.service_id, DEFAULT_APPOINTMENT_MINUTES))
        if overlaps(start, end, o_start, o_end):
            return other
    return None


def get_booking_settings(session: Session) -> BookingSettings:
    settings = session.exec(select(BookingSettings).order_by(BookingSettings.id)).first()
    if settings is None:
        # unsaved defaults until an admin stores the policy
        return BookingSettings(**DEFAULT_BOOKING_SETTINGS)
    return settings


def get_booking_window(settings: BookingSettings, today: date) -> tuple[date, date]:
    if settings.same_day_policy == "next_day":
        min_date = today + timedelta(days=1)
    elif settings.same_day_policy == "next_week":
        min_date = today + timedelta(days=7)
    else:
        min_date = today
    max_date = today + relativedelta(months=settings.max_months_ahead)
    return min_date, max_date


def get_available_dates(session: Session, today: date, days: int = 30) -> tuple[date, date, List[date]]:
    """Dates in the next ``days`` days, inside the booking window, that have hours and are not closed."""
    min_date, max_date = get_booking_window(get_booking_settings(session), today)

    open_weekdays = set(session.exec(select(BusinessHour.day_of_week)).all())
    closed = set(
        session.exec(
            select(BlockedSlot.date)
            .where(BlockedSlot.date >= today)
            .where(BlockedSlot.start_time.is_(None))
            .where(BlockedSlot.end_time.is_(None))
        ).all()
    )

    dates = []
    for offset in range(days):
        d = today + timedelta(days=offset)
        if d < min_date or d > max_date:
            continue
        if d.weekday() in open_weekdays and d not in closed:
            dates.append(d)

    logger.debug(f"{len(dates)} bookable dates between {min_date} and {max_date}")
    return min_date, max_date, dates
