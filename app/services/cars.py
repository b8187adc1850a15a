from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.core.errors import InvalidRequestError, NotFoundError
from app.models.car import Car

logger = logging.getLogger(__name__)


def list_cars(db: Session) -> List[Car]:
    return db.query(Car).order_by(Car.id.asc()).all()


def list_available_cars(db: Session) -> List[Car]:
    return db.query(Car).filter(Car.is_available.is_(True)).order_by(Car.id.asc()).all()


def get_car(db: Session, car_id: int, *, for_update: bool = False) -> Car:
    query = db.query(Car).filter(Car.id == car_id)
    if for_update:
        # SELECT ... FOR UPDATE no PostgreSQL; ignorado pelo SQLite
        query = query.with_for_update()
    car = query.first()
    if car is None:
        raise NotFoundError(f"Carro não encontrado: {car_id}")
    return car


def create_car(db: Session, *, make: str, model: str, year: int, price_per_day: Decimal) -> Car:
    car = Car(
        make=make.strip(),
        model=model.strip(),
        year=year,
        price_per_day=price_per_day,
        is_available=True,
    )
    try:
        db.add(car)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(car)
    logger.info("Car created car_id=%s", car.id)
    return car


def delete_car(db: Session, car_id: int) -> None:
    car = get_car(db, car_id)
    try:
        # pedidos antigos ficam, só perdem a referência ao carro
        for order in list(car.orders):
            order.car = None
        db.delete(car)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Car deleted car_id=%s", car_id)


def set_availability(db: Session, car_id: int, available: bool, *, commit: bool = True) -> Car:
    """Liga/desliga a disponibilidade. Idempotente.

    Com commit=False participa da transação de quem chamou (só faz flush).
    """
    car = get_car(db, car_id)
    if car.is_available == available:
        logger.debug("Car availability unchanged car_id=%s available=%s", car_id, available)
        return car

    car.is_available = available
    if commit:
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(car)
    else:
        db.flush()

    logger.info("Car availability updated car_id=%s available=%s", car_id, available)
    return car


def reserve_car(db: Session, car_id: int) -> None:
    """Marca o carro como indisponível só se ainda estiver disponível.

    UPDATE condicional: de duas reservas concorrentes, só uma afeta a linha.
    Não faz commit; roda na transação de quem chamou.
    """
    result = db.execute(
        update(Car)
        .where(Car.id == car_id, Car.is_available.is_(True))
        .values(is_available=False)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.warning("Car reservation lost car_id=%s", car_id)
        raise InvalidRequestError("Carro indisponível para aluguel")
    # objeto em memória ainda tem o valor antigo
    car = db.get(Car, car_id)
    if car is not None:
        db.expire(car, ["is_available"])
    logger.info("Car reserved car_id=%s", car_id)
