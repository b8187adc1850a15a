from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.deps import require_identity
from app.schemas.order import OrderRead, order_to_dict
from app.schemas.user import UserRead, user_to_dict
from app.services import auth_service
from app.services import orders as order_service

router = APIRouter(tags=["users"])


@router.get("/current-user", response_model=UserRead)
def get_current_user(identity: str = Depends(require_identity), db: Session = Depends(get_db)):
    return user_to_dict(auth_service.get_user_by_email(db, identity))


@router.get("/current-user-order", response_model=OrderRead)
def get_current_user_order(identity: str = Depends(require_identity), db: Session = Depends(get_db)):
    """Primeiro pedido ainda ativo (PENDING/PAID/ACTIVE) do usuário logado."""
    return order_to_dict(order_service.get_current_order_for_user(db, identity))


@router.get("/current-user-orders", response_model=List[OrderRead])
def list_current_user_orders(identity: str = Depends(require_identity), db: Session = Depends(get_db)):
    return [order_to_dict(o) for o in order_service.list_orders_for_user(db, identity)]
