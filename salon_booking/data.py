# salon_booking/data.py

# Index = BusinessHour.day_of_week = date.weekday() (0=Mon ... 6=Sun)
WEEKDAY_NAMES = [
    "Lunes",
    "Martes",
    "Miércoles",
    "Jueves",
    "Viernes",
    "Sábado",
    "Domingo",
]

DEFAULT_BOOKING_SETTINGS = {
    "same_day_policy": "same_day",
    "max_months_ahead": 3,
}

DEFAULT_CUSTOMIZATION = {
    "business_name": "Mi Negocio",
    "welcome_title": "Reserva tu cita en minutos",
    "welcome_subtitle": (
        "Selecciona el servicio que necesitas, elige una fecha y hora disponible, "
        "y reserva tu cita de forma rápida y sencilla."
    ),
    "booking_instructions": "Para reservar, selecciona un servicio, fecha y hora disponible.",
    "hero_image_url": None,
    "primary_color": "#9b87f5",
    "business_name_color": "#000000",
    "welcome_title_color": "#000000",
    "welcome_subtitle_color": "#000000",
    "booking_instructions_color": "#000000",
}

# extra spoken words that point at a service whose name contains the key
SERVICE_KEYWORDS = {
    "corte": ["cortar", "pelo", "cabello", "peluquería", "peluqueria"],
    "uña": ["uñas", "manicura", "manicure"],
    "depil": ["depilación", "depilacion", "depilar", "cera"],
    "masa": ["masaje", "relajante", "terapia"],
}


def day_name(day_of_week: int) -> str:
    return WEEKDAY_NAMES[day_of_week]
