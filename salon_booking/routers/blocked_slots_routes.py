# salon_booking/routers/blocked_slots_routes.py

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from salon_booking.core import validate_time_range
from salon_booking.db import get_session
from salon_booking.models import BlockedSlot
from salon_booking.schemas import BlockedSlotCreate, BlockedSlotPublic
from salon_booking.deps import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/blocked-slots",
    tags=["blocked-slots"],
    dependencies=[Depends(require_admin)],
)


def to_public(block: BlockedSlot) -> dict:
    return {
        "id": block.id,
        "date": block.date,
        "start_time": block.start_time,
        "end_time": block.end_time,
        "whole_day": block.start_time is None and block.end_time is None,
    }


@router.get("", response_model=List[BlockedSlotPublic])
def list_blocked_slots(
    on_date: Optional[date] = None,
    session: Session = Depends(get_session),
):
    stmt = select(BlockedSlot)
    if on_date is not None:
        stmt = stmt.where(BlockedSlot.date == on_date)
    stmt = stmt.order_by(BlockedSlot.date, BlockedSlot.start_time)
    return [to_public(b) for b in session.exec(stmt).all()]


@router.post("", response_model=BlockedSlotPublic, status_code=201)
def create_blocked_slot(
    block: BlockedSlotCreate,
    session: Session = Depends(get_session),
):
    # Either a whole day (no times) or a complete [start, end) range
    if (block.start_time is None) != (block.end_time is None):
        raise HTTPException(status_code=422, detail="Both start_time and end_time are required for a partial block")
    if block.start_time is not None:
        validate_time_range(block.start_time, block.end_time)

    db_block = BlockedSlot(**block.model_dump())
    session.add(db_block)
    session.commit()
    session.refresh(db_block)

    if db_block.start_time is None:
        logger.info(f"Blocked whole day {db_block.date}")
    else:
        logger.info(f"Blocked {db_block.date} {db_block.start_time:%H:%M}-{db_block.end_time:%H:%M}")
    return to_public(db_block)


@router.delete("/{block_id}", status_code=204)
def delete_blocked_slot(
    block_id: int,
    session: Session = Depends(get_session),
):
    db_block = session.get(BlockedSlot, block_id)
    if db_block is None:
        raise HTTPException(status_code=404, detail="Blocked slot not found")

    session.delete(db_block)
    session.commit()
    logger.info(f"Blocked slot {block_id} removed")
