# salon_booking/models.py

from typing import Optional
from datetime import datetime, timezone, date as Date, time as Time
from decimal import Decimal

from sqlalchemy import Index, UniqueConstraint, text
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    # timestamps are stored timezone-aware, in UTC
    return datetime.now(timezone.utc)


class Service(SQLModel, table=True):
    __tablename__ = "services"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    duration_minutes: int
    price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    created_at: datetime = Field(default_factory=utcnow)


class BusinessHour(SQLModel, table=True):
    __tablename__ = "business_hours"

    id: Optional[int] = Field(default=None, primary_key=True)
    day_of_week: int = Field(index=True)  # 0=Mon ... 6=Sun
    start_time: Time
    end_time: Time


class BlockedSlot(SQLModel, table=True):
    __tablename__ = "blocked_slots"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: Date = Field(index=True)
    # both null -> the whole date is blocked
    start_time: Optional[Time] = None
    end_time: Optional[Time] = None


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    __table_args__ = (
        # at most one accepted appointment per start
        Index(
            "uq_accepted_start",
            "date",
            "time",
            unique=True,
            sqlite_where=text("status = 'accepted'"),
            postgresql_where=text("status = 'accepted'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    service_id: int = Field(foreign_key="services.id", index=True)
    name: str
    phone: str = Field(index=True)
    date: Date = Field(index=True)
    time: Time
    status: str = "pending"
    created_at: datetime = Field(default_factory=utcnow)


class BookingSettings(SQLModel, table=True):
    __tablename__ = "booking_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    same_day_policy: str = "same_day"
    max_months_ahead: int = 3


class CustomizationSettings(SQLModel, table=True):
    __tablename__ = "customization_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    business_name: Optional[str] = None
    welcome_title: Optional[str] = None
    welcome_subtitle: Optional[str] = None
    booking_instructions: Optional[str] = None
    hero_image_url: Optional[str] = None
    primary_color: Optional[str] = None
    business_name_color: Optional[str] = None
    welcome_title_color: Optional[str] = None
    welcome_subtitle_color: Optional[str] = None
    booking_instructions_color: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AdminUser(SQLModel, table=True):
    __tablename__ = "admin_users"
    __table_args__ = (UniqueConstraint("username", name="uq_admin_username"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True)
    password_hash: str
    is_confirmed: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class RevokedToken(SQLModel, table=True):
    __tablename__ = "revoked_tokens"

    jti: str = Field(primary_key=True)
    # token "exp" claim (epoch seconds); the row can go once it has passed
    expires_at: int = Field(default=0, index=True)
    revoked_at: datetime = Field(default_factory=utcnow)
