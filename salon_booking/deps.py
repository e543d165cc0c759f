# salon_booking/deps.py

from fastapi import Depends, HTTPException

from salon_booking.auth import get_current_user


def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if not current_user["is_confirmed"]:
        raise HTTPException(status_code=403, detail="Forbidden")
    return current_user
