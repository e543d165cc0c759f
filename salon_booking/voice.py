# salon_booking/voice.py
"""
Best-effort extraction of booking data from a dictated (Spanish) sentence,
e.g. "Agendar a María el jueves a las 4 de la tarde para manicura".

Only a small grammar is understood: a name after "a"/"para", a 9-10 digit
phone, "mañana", a weekday or "14 de abril" / "14/04", "a las H[:MM]" with
an optional period, and a service named or hinted by keyword.
"""

import re
import unicodedata
from dataclasses import dataclass, asdict
from datetime import date, timedelta
from typing import Iterable, Optional

from salon_booking.data import SERVICE_KEYWORDS

WEEKDAYS = ["lunes", "martes", "miercoles", "jueves", "viernes", "sabado", "domingo"]

MONTHS = {
    "enero": 1, "febrero": 2, "marzo": 3, "abril": 4, "mayo": 5, "junio": 6,
    "julio": 7, "agosto": 8, "septiembre": 9, "octubre": 10, "noviembre": 11, "diciembre": 12,
}

# words that can follow "a"/"para" without being a name
STOPWORDS = {
    "el", "la", "las", "los", "un", "una", "de", "del", "y", "para", "a", "hoy",
    "manana", "mediodia", "medianoche", "cita", "las", "pm", "am",
    *WEEKDAYS, *MONTHS,
}

NAME_RE = re.compile(r"\b(?:para|a)\s+([^\W\d_]+)(?:\s+([^\W\d_]+))?", re.IGNORECASE)
PHONE_RE = re.compile(r"\b(\d{9,10})\b")
WEEKDAY_RE = re.compile(r"\b(lunes|martes|miercoles|jueves|viernes|sabado|domingo)\b")
DATE_RE = re.compile(r"\b(\d{1,2})(?:\s+de\s+|/)(" + "|".join(MONTHS) + r"|\d{1,2})\b")
TIME_RE = re.compile(
    r"\b(?:a las|las)\s+(\d{1,2})(?::(\d{2}))?"
    r"(?:\s*(am|pm)\b|\s+(de la tarde|de la noche|de la manana))?"
)


def fold(text: str) -> str:
    """Lower-case and strip accents ("Mañana" -> "manana")."""
    text = unicodedata.normalize("NFKD", text or "")
    return "".join(ch for ch in text if not unicodedata.combining(ch)).lower()


@dataclass
class ParsedBooking:
    name: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[date] = None
    time: Optional[str] = None
    service_id: Optional[int] = None

    def is_empty(self) -> bool:
        return not (self.name or self.phone or self.date or self.time or self.service_id)

    def as_dict(self) -> dict:
        return asdict(self)


def _service_words(services) -> set:
    words = set()
    for service in services:
        name = fold(service.name)
        words.update(name.split())
        for key, extra in SERVICE_KEYWORDS.items():
            if fold(key) in name:
                words.update(fold(w) for w in extra)
    return words


def extract_name(text: str, services=()) -> Optional[str]:
    skip = STOPWORDS | _service_words(services)
    for match in NAME_RE.finditer(text):
        first, second = match.group(1), match.group(2)
        if fold(first) in skip:
            continue
        words = [first]
        if second and fold(second) not in skip:
            words.append(second)
        return " ".join(w.capitalize() for w in words)
    return None


def extract_phone(text: str) -> Optional[str]:
    match = PHONE_RE.search(text)
    return match.group(1) if match else None


def extract_date(text: str, today: date) -> Optional[date]:
    folded = fold(text)

    # "de la mañana" is a time of day, not tomorrow
    if re.search(r"\bmanana\b", folded.replace("de la manana", "")):
        return today + timedelta(days=1)

    match = WEEKDAY_RE.search(folded)
    if match:
        days_ahead = WEEKDAYS.index(match.group(1)) - today.weekday()
        if days_ahead <= 0:
            days_ahead += 7
        return today + timedelta(days=days_ahead)

    match = DATE_RE.search(folded)
    if match:
        day = int(match.group(1))
        month_token = match.group(2)
        month = MONTHS[month_token] if month_token in MONTHS else int(month_token)
        try:
            found = date(today.year, month, day)
        except ValueError:
            return None
        if found < today:
            try:
                found = found.replace(year=today.year + 1)
            except ValueError:
                return None
        return found

    return None


def extract_time(text: str) -> Optional[str]:
    match = TIME_RE.search(fold(text))
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    period = match.group(3) or match.group(4)

    if period in ("pm", "de la tarde", "de la noche"):
        if hours < 12:
            hours += 12
    elif period in ("am", "de la manana"):
        if hours == 12:
            hours = 0
    elif 1 <= hours <= 11:
        # bare hours are read as afternoon
        hours += 12

    if hours > 23 or minutes > 59:
        return None
    return f"{hours:02d}:{minutes:02d}"


def extract_service_id(text: str, services) -> Optional[int]:
    folded = fold(text)
    services = list(services)

    for service in services:
        if re.search(rf"\b(?:para|de)\s+{re.escape(fold(service.name))}\b", folded):
            return service.id

    for service in services:
        name = fold(service.name)
        keywords = [name]
        for key, extra in SERVICE_KEYWORDS.items():
            if fold(key) in name:
                keywords.extend(fold(w) for w in extra)
        # keywords match at word starts ("cera" is not in "tercera")
        if any(re.search(rf"\b{re.escape(k)}", folded) for k in keywords):
            return service.id

    return None


def parse_booking_request(text: str, services: Iterable = (), today: Optional[date] = None) -> ParsedBooking:
    today = today or date.today()
    services = list(services)
    return ParsedBooking(
        name=extract_name(text, services),
        phone=extract_phone(text),
        date=extract_date(text, today),
        time=extract_time(text),
        service_id=extract_service_id(text, services),
    )
