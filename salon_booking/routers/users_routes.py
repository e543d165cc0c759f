# salon_booking/routers/users_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from salon_booking.db import get_session
from salon_booking.models import AdminUser
from salon_booking.schemas import AdminUserPublic
from salon_booking.deps import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/users",
    tags=["users"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=List[AdminUserPublic])
def list_users(session: Session = Depends(get_session)):
    return session.exec(select(AdminUser).order_by(AdminUser.username)).all()


@router.post("/{user_id}/confirm", response_model=AdminUserPublic)
def confirm_user(
    user_id: int,
    session: Session = Depends(get_session),
):
    user = session.get(AdminUser, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    user.is_confirmed = True
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"Admin account '{user.username}' confirmed")
    return user
