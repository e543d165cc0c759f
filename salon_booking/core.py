# salon_booking/core.py

import re
from datetime import datetime, date, time, timedelta

from fastapi import HTTPException

from salon_booking.config import PHONE_DIGITS


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    # half-open intervals: touching ends do not overlap
    return a_start < b_end and b_start < a_end


def at(on_date: date, t: time) -> datetime:
    return datetime.combine(on_date, t)


def span(on_date: date, t: time, minutes: int) -> tuple[datetime, datetime]:
    start = at(on_date, t)
    return start, start + timedelta(minutes=minutes)


def validate_phone(phone: str) -> str:
    phone = re.sub(r"[\s-]", "", phone or "")
    if not re.fullmatch(rf"\d{{{PHONE_DIGITS}}}", phone):
        raise HTTPException(status_code=422, detail=f"Phone must be {PHONE_DIGITS} digits")
    return phone


def validate_time_range(start: time, end: time):
    if start >= end:
        raise HTTPException(status_code=422, detail="start_time must be earlier than end_time")
