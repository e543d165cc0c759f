# salon_booking/routers/services_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from salon_booking.db import get_session
from salon_booking.models import Appointment, Service
from salon_booking.schemas import ServiceCreate, ServicePublic, ServiceUpdate
from salon_booking.deps import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["services"],
)


@router.get("/services", response_model=List[ServicePublic])
def list_services(session: Session = Depends(get_session)):
    # newest first, like the admin listing
    return session.exec(select(Service).order_by(Service.created_at.desc(), Service.id.desc())).all()


@router.get("/services/{service_id}", response_model=ServicePublic)
def get_service(service_id: int, session: Session = Depends(get_session)):
    service = session.get(Service, service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.post(
    "/admin/services",
    response_model=ServicePublic,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_service(
    service: ServiceCreate,
    session: Session = Depends(get_session),
):
    db_service = Service(**service.model_dump())
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    logger.info(f"Service {db_service.id} '{db_service.name}' created")
    return db_service


@router.put(
    "/admin/services/{service_id}",
    response_model=ServicePublic,
    dependencies=[Depends(require_admin)],
)
def update_service(
    service_id: int,
    changes: ServiceUpdate,
    session: Session = Depends(get_session),
):
    db_service = session.get(Service, service_id)
    if db_service is None:
        raise HTTPException(status_code=404, detail="Service not found")

    for key, value in changes.model_dump(exclude_unset=True).items():
        if key != "price" and value is None:
            raise HTTPException(status_code=422, detail=f"{key} cannot be null")
        setattr(db_service, key, value)

    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    logger.info(f"Service {service_id} updated")
    return db_service


@router.delete(
    "/admin/services/{service_id}",
    status_code=204,
    dependencies=[Depends(require_admin)],
)
def delete_service(
    service_id: int,
    session: Session = Depends(get_session),
):
    db_service = session.get(Service, service_id)
    if db_service is None:
        raise HTTPException(status_code=404, detail="Service not found")

    in_use = session.exec(
        select(Appointment).where(Appointment.service_id == service_id)
    ).first()
    if in_use is not None:
        raise HTTPException(status_code=409, detail="Service has appointments")

    session.delete(db_service)
    session.commit()
    logger.info(f"Service {service_id} deleted")
