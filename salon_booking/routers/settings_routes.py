# salon_booking/routers/settings_routes.py

import logging

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from salon_booking.availability import get_booking_settings
from salon_booking.data import DEFAULT_CUSTOMIZATION
from salon_booking.db import get_session
from salon_booking.models import BookingSettings, CustomizationSettings, utcnow
from salon_booking.schemas import (
    BookingSettingsPublic,
    BookingSettingsUpdate,
    CustomizationSettingsBase,
    CustomizationSettingsPublic,
)
from salon_booking.deps import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["settings"],
)


def get_customization(session: Session):
    return session.exec(select(CustomizationSettings).order_by(CustomizationSettings.id)).first()


@router.get("/settings/booking", response_model=BookingSettingsPublic)
def booking_settings(session: Session = Depends(get_session)):
    return get_booking_settings(session)


@router.put(
    "/admin/settings/booking",
    response_model=BookingSettingsPublic,
    dependencies=[Depends(require_admin)],
)
def update_booking_settings(
    changes: BookingSettingsUpdate,
    session: Session = Depends(get_session),
):
    settings = session.exec(select(BookingSettings).order_by(BookingSettings.id)).first()
    if settings is None:
        settings = get_booking_settings(session)

    if changes.same_day_policy is not None:
        settings.same_day_policy = changes.same_day_policy.value
    if changes.max_months_ahead is not None:
        settings.max_months_ahead = changes.max_months_ahead

    session.add(settings)
    session.commit()
    session.refresh(settings)
    logger.info(
        f"Booking policy set to {settings.same_day_policy}, {settings.max_months_ahead} months ahead"
    )
    return settings


@router.get("/settings/customization", response_model=CustomizationSettingsPublic)
def customization(session: Session = Depends(get_session)):
    settings = get_customization(session)
    if settings is None:
        return DEFAULT_CUSTOMIZATION
    return settings


@router.put(
    "/admin/settings/customization",
    response_model=CustomizationSettingsPublic,
    dependencies=[Depends(require_admin)],
)
def update_customization(
    changes: CustomizationSettingsBase,
    session: Session = Depends(get_session),
):
    settings = get_customization(session)
    if settings is None:
        settings = CustomizationSettings(**DEFAULT_CUSTOMIZATION)

    for key, value in changes.model_dump(exclude_unset=True).items():
        setattr(settings, key, value)
    settings.updated_at = utcnow()

    session.add(settings)
    session.commit()
    session.refresh(settings)
    logger.info("Customization settings saved")
    return settings
