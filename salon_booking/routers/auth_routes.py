# salon_booking/routers/auth_routes.py

import logging
import time

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from salon_booking.db import get_session
from salon_booking.models import AdminUser, RevokedToken
from salon_booking.schemas import Token, AdminUserCreate, AdminUserPublic
from salon_booking.auth import verify_password, create_access_token, get_current_user, get_token_payload, hash_password

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
):
    username = form_data.username
    password = form_data.password

    user = session.exec(
        select(AdminUser).where(AdminUser.username == username)
    ).first()

    if user is None or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login for '{username}'")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not user.is_confirmed:
        logger.warning(f"Login refused for unconfirmed account '{username}'")
        raise HTTPException(status_code=403, detail="Account not confirmed")

    token = create_access_token({"sub": user.username})
    logger.info(f"Admin '{username}' signed in")
    return {"access_token": token, "token_type": "bearer"}


@router.post("/logout", status_code=204)
def logout(
    payload: dict = Depends(get_token_payload),
    session: Session = Depends(get_session),
):
    now = int(time.time())

    # expired tokens fail decoding, so their revocations can go
    expired = session.exec(select(RevokedToken).where(RevokedToken.expires_at < now)).all()
    for row in expired:
        session.delete(row)

    jti = payload.get("jti")
    if jti is not None:
        session.add(RevokedToken(jti=jti, expires_at=int(payload.get("exp", now))))
    session.commit()
    if expired:
        logger.info(f"Pruned {len(expired)} expired revoked tokens")
    logger.info(f"Admin '{payload['sub']}' signed out")


@router.post("/register", status_code=201, response_model=AdminUserPublic)
def register(
    user: AdminUserCreate,
    session: Session = Depends(get_session),
):
    if user.password != user.confirm_password:
        raise HTTPException(status_code=422, detail="Passwords do not match")

    # 1) Check if username already exists
    existing = session.exec(
        select(AdminUser).where(AdminUser.username == user.username)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Username already registered")

    # 2) Create the account; it stays unconfirmed until an admin confirms it
    db_user = AdminUser(
        username=user.username,
        password_hash=hash_password(user.password),
    )

    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    logger.info(f"Registered admin account '{db_user.username}' (unconfirmed)")
    return db_user


@router.get("/me", response_model=AdminUserPublic)
def me(current_user: dict = Depends(get_current_user)):
    return current_user
