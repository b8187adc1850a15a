from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.database import Base
from app.core.errors import NotFoundError
from app.models.car import Car
from app.models.order import Order, OrderStatus
from app.models.user import User
from app.services import cars as car_service
from tests.fixtures_data import HAPPY_PATH_CAR


def _build_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return testing_session_local()


def _create_car(db, **overrides) -> Car:
    data = {**HAPPY_PATH_CAR, **overrides}
    return car_service.create_car(
        db,
        make=data["make"],
        model=data["model"],
        year=data["year"],
        price_per_day=Decimal(str(data["price_per_day"])),
    )


def test_create_car_starts_available():
    db = _build_session()

    car = _create_car(db)

    assert car.id is not None
    assert car.is_available is True
    assert car.current_order_id is None
    assert car_service.get_car(db, car.id).make == "Toyota"


def test_set_availability_is_idempotent():
    db = _build_session()
    car = _create_car(db)

    car_service.set_availability(db, car.id, False)
    car_service.set_availability(db, car.id, False)
    assert car_service.get_car(db, car.id).is_available is False

    car_service.set_availability(db, car.id, True)
    car_service.set_availability(db, car.id, True)
    assert car_service.get_car(db, car.id).is_available is True


def test_set_availability_unknown_car_raises_not_found():
    db = _build_session()

    with pytest.raises(NotFoundError):
        car_service.set_availability(db, 999, False)


def test_list_available_cars_filters_unavailable():
    db = _build_session()
    first = _create_car(db)
    second = _create_car(db, make="Honda", model="Civic")
    car_service.set_availability(db, first.id, False)

    assert [c.id for c in car_service.list_cars(db)] == [first.id, second.id]
    assert [c.id for c in car_service.list_available_cars(db)] == [second.id]


def test_delete_car_keeps_orders_without_car_reference():
    db = _build_session()
    car = _create_car(db)
    user = User(email="a@x.com", username="alice", password_hash="x")
    order = Order(
        user=user,
        car=car,
        start_date=date.today(),
        end_date=date.today() + timedelta(days=2),
        total_price=Decimal("100.00"),
        status=OrderStatus.COMPLETED.value,
    )
    db.add_all([user, order])
    db.commit()
    order_id = order.id

    car_service.delete_car(db, car.id)

    assert db.query(Car).count() == 0
    stored = db.query(Order).filter(Order.id == order_id).one()
    assert stored.car_id is None
    assert stored.user_id == user.id


def test_delete_unknown_car_raises_not_found():
    db = _build_session()

    with pytest.raises(NotFoundError):
        car_service.delete_car(db, 42)
