"""
Ciclo de vida do pedido de aluguel.

Estados: PENDING (inicial), PAID, ACTIVE, COMPLETED e REJECTED (finais).
Não existe guarda de transição: qualquer status conhecido é aceito a partir
de qualquer outro. COMPLETED/REJECTED liberam o carro; REJECTED ainda
desvincula o pedido do carro e do usuário.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidRequestError, NotFoundError
from app.models.order import ACTIVE_STATUSES, TERMINAL_STATUSES, Order, OrderStatus
from app.services.auth_service import get_user_by_email
from app.services.cars import get_car, reserve_car, set_availability

logger = logging.getLogger(__name__)


def parse_status(name: str | None) -> Optional[OrderStatus]:
    """'rejected', ' Rejected ' -> OrderStatus.REJECTED; desconhecido -> None."""
    normalized = (name or "").strip().upper()
    if not normalized:
        return None
    try:
        return OrderStatus(normalized)
    except ValueError:
        return None


def list_orders(db: Session) -> List[Order]:
    return db.query(Order).order_by(Order.id.asc()).all()


def get_order(db: Session, order_id: int) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if order is None:
        raise NotFoundError(f"Pedido não encontrado: {order_id}")
    return order


def list_orders_for_user(db: Session, email: str) -> List[Order]:
    user = get_user_by_email(db, email)
    return db.query(Order).filter(Order.user_id == user.id).order_by(Order.id.asc()).all()


def get_current_order_for_user(db: Session, email: str) -> Order:
    user = get_user_by_email(db, email)
    order = (
        db.query(Order)
        .filter(
            Order.user_id == user.id,
            Order.status.in_([status.value for status in ACTIVE_STATUSES]),
        )
        .order_by(Order.id.asc())
        .first()
    )
    if order is None:
        raise NotFoundError(f"Nenhum pedido ativo para {email}")
    return order


def create_order(
    db: Session,
    *,
    car_id: int,
    start_date: date,
    end_date: date,
    total_price: Decimal,
    requester_email: str,
    today: date | None = None,
) -> Order:
    logger.info("Creating order user=%s car_id=%s", requester_email, car_id)
    today = today or date.today()

    user = get_user_by_email(db, requester_email)
    car = get_car(db, car_id, for_update=True)

    if not car.is_available:
        logger.warning("Attempted to order unavailable car car_id=%s", car.id)
        raise InvalidRequestError("Carro indisponível para aluguel")

    if start_date < today:
        logger.warning("Order start date in the past start=%s", start_date)
        raise InvalidRequestError("A data de início não pode estar no passado")

    if end_date < start_date:
        logger.warning("Order end date before start date start=%s end=%s", start_date, end_date)
        raise InvalidRequestError("A data final não pode ser anterior à data de início")

    order = Order(
        user=user,
        car=car,
        start_date=start_date,
        end_date=end_date,
        total_price=total_price,
        status=OrderStatus.PENDING.value,
    )
    try:
        # a checagem acima é só leitura; a reserva de fato é o UPDATE condicional
        reserve_car(db, car.id)
        db.add(order)
        db.flush()  # gera order.id
        car.current_order_id = order.id
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(order)

    logger.info("Order created order_id=%s", order.id)
    return order


def update_status(db: Session, *, order_id: int, status_name: str, acting_email: str) -> Order:
    logger.info("Updating order status order_id=%s status=%s user=%s", order_id, status_name, acting_email)

    order = get_order(db, order_id)
    # Só valida a identidade; qualquer usuário autenticado pode mudar qualquer pedido.
    get_user_by_email(db, acting_email)

    new_status = parse_status(status_name)
    if new_status is None:
        logger.warning("Invalid order status status=%s", status_name)
        raise InvalidRequestError(f"Status de pedido inválido: {status_name}")

    try:
        order.status = new_status.value
        db.flush()

        car = order.car
        if new_status in TERMINAL_STATUSES and car is not None:
            set_availability(db, car.id, True, commit=False)
            if new_status == OrderStatus.REJECTED or car.current_order_id == order.id:
                car.current_order_id = None

        if new_status == OrderStatus.REJECTED:
            order.detach()

        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(order)

    logger.info("Order status updated order_id=%s status=%s", order.id, order.status)
    return order
