from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.deps import require_identity
from app.schemas.car import CarCreate, CarRead, car_to_dict
from app.services import cars as car_service

router = APIRouter(prefix="/cars", tags=["cars"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[CarRead])
def list_cars(available: bool | None = None, db: Session = Depends(get_db)):
    if available:
        cars = car_service.list_available_cars(db)
    else:
        cars = car_service.list_cars(db)
    return [car_to_dict(car) for car in cars]


@router.get("/{car_id}", response_model=CarRead)
def get_car(car_id: int, db: Session = Depends(get_db)):
    return car_to_dict(car_service.get_car(db, car_id))


@router.post("", response_model=CarRead, status_code=status.HTTP_201_CREATED)
def create_car(
    payload: CarCreate,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    logger.info("Creating car by user=%s", identity)
    car = car_service.create_car(
        db,
        make=payload.make,
        model=payload.model,
        year=payload.year,
        price_per_day=payload.price_per_day,
    )
    return car_to_dict(car)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_car(
    car_id: int,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    logger.info("Deleting car car_id=%s by user=%s", car_id, identity)
    car_service.delete_car(db, car_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
