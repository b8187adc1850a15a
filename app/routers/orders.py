from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.deps import require_identity
from app.schemas.order import OrderCreate, OrderRead, StatusUpdate, order_to_dict
from app.services import orders as order_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderRead])
def list_orders(db: Session = Depends(get_db)):
    return [order_to_dict(o) for o in order_service.list_orders(db)]


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return order_to_dict(order_service.get_order(db, order_id))


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    order = order_service.create_order(
        db,
        car_id=payload.car_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        total_price=payload.total_price,
        requester_email=identity,
    )
    return order_to_dict(order)


@router.patch("/{order_id}", response_model=OrderRead)
def update_status(
    order_id: int,
    body: StatusUpdate,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    order = order_service.update_status(
        db,
        order_id=order_id,
        status_name=body.status,
        acting_email=identity,
    )
    return order_to_dict(order)
