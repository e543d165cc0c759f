# salon_booking/schemas.py

from pydantic import BaseModel, Field
from enum import Enum
from datetime import datetime, date, time
from typing import List, Optional


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AppointmentStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class SameDayPolicy(str, Enum):
    same_day = "same_day"
    next_day = "next_day"
    next_week = "next_week"


# Admin users

class AdminUserPublic(BaseModel):
    id: int
    username: str
    is_confirmed: bool


class AdminUserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6, max_length=72)
    confirm_password: str


# Services

class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    duration_minutes: int = Field(gt=0)
    price: Optional[float] = Field(default=None, ge=0)


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    price: Optional[float] = Field(default=None, ge=0)


class ServicePublic(BaseModel):
    id: int
    name: str
    duration_minutes: int
    price: Optional[float] = None
    created_at: datetime


class ServiceSummary(BaseModel):
    name: str
    duration_minutes: int
    price: Optional[float] = None


# Business hours

class BusinessHourCreate(BaseModel):
    day_of_week: int = Field(ge=0, le=6)  # 0=Mon, 1=Tues....
    start_time: time
    end_time: time


class BusinessHourUpdate(BaseModel):
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    start_time: Optional[time] = None
    end_time: Optional[time] = None


class BusinessHourPublic(BaseModel):
    id: int
    day_of_week: int
    day_name: str
    start_time: time
    end_time: time


# Blocked slots

class BlockedSlotCreate(BaseModel):
    date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None


class BlockedSlotPublic(BaseModel):
    id: int
    date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    whole_day: bool


# Appointments

class AppointmentCreate(BaseModel):
    service_id: int
    name: str = Field(min_length=1)
    phone: str
    date: date
    time: time


class AdminAppointmentCreate(AppointmentCreate):
    status: AppointmentStatus = AppointmentStatus.accepted


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentPublic(BaseModel):
    id: int
    service_id: int
    service: Optional[ServiceSummary] = None
    name: str
    phone: str
    date: date
    time: time
    status: AppointmentStatus
    created_at: datetime


# Availability

class TimeSlot(BaseModel):
    time: str
    available: bool


class AvailabilityResponse(BaseModel):
    date: date
    service_id: int
    slots: List[TimeSlot]


class AvailableDatesResponse(BaseModel):
    min_date: date
    max_date: date
    dates: List[date]


# Settings

class BookingSettingsPublic(BaseModel):
    same_day_policy: SameDayPolicy
    max_months_ahead: int


class BookingSettingsUpdate(BaseModel):
    same_day_policy: Optional[SameDayPolicy] = None
    max_months_ahead: Optional[int] = Field(default=None, gt=0, le=24)


class CustomizationSettingsBase(BaseModel):
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


class CustomizationSettingsPublic(CustomizationSettingsBase):
    updated_at: Optional[datetime] = None


# Dashboard

class DashboardResponse(BaseModel):
    pending: int
    accepted: int
    rejected: int
    total: int
    today_accepted: int
    services: int
    business_hours: int


# Voice dictation

class VoiceParseRequest(BaseModel):
    text: str = Field(min_length=1)


class VoiceParseResponse(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[date] = None
    time: Optional[str] = None
    service_id: Optional[int] = None
