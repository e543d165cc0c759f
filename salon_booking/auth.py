# salon_booking/auth.py

import logging
import uuid
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlmodel import Session, select

from salon_booking.config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from salon_booking.db import get_session
from salon_booking.models import AdminUser, RevokedToken

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def create_access_token(data: dict, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode["exp"] = expire
    to_encode["jti"] = uuid.uuid4().hex
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_token_payload(
    token: str = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> dict:
    payload = decode_token(token)
    if payload.get("sub") is None:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    jti = payload.get("jti")
    if jti is not None and session.get(RevokedToken, jti) is not None:
        raise HTTPException(
            status_code=401,
            detail="Token revoked",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


def get_current_user(
    payload: dict = Depends(get_token_payload),
    session: Session = Depends(get_session),
) -> dict:
    user = session.exec(
        select(AdminUser).where(AdminUser.username == payload["sub"])
    ).first()

    if user is None:
        raise HTTPException(
            status_code=401,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {
        "id": user.id,
        "username": user.username,
        "is_confirmed": user.is_confirmed,
    }


def ensure_admin(session: Session, username: str, password: str) -> AdminUser:
    """Create ``username`` as a confirmed admin unless it already exists."""
    user = session.exec(select(AdminUser).where(AdminUser.username == username)).first()
    if user is not None:
        return user

    user = AdminUser(username=username, password_hash=hash_password(password), is_confirmed=True)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"Bootstrap admin '{username}' created")
    return user
