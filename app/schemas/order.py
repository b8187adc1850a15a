from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from app.models.order import Order
from app.schemas.car import CarRead, car_to_dict
from app.schemas.user import UserRead, user_to_dict


class OrderCreate(BaseModel):
    car_id: int = Field(..., ge=1)
    start_date: date
    end_date: date
    total_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class StatusUpdate(BaseModel):
    status: str


class OrderRead(BaseModel):
    id: int
    car: Optional[CarRead] = None
    user: Optional[UserRead] = None
    start_date: date
    end_date: date
    status: str
    total_price: float
    created_at: Optional[datetime] = None


def order_to_dict(order: Order) -> Dict[str, Any]:
    return {
        "id": order.id,
        "car": car_to_dict(order.car) if order.car is not None else None,
        "user": user_to_dict(order.user) if order.user is not None else None,
        "start_date": order.start_date,
        "end_date": order.end_date,
        # minúsculo, no mesmo formato do enum do frontend
        "status": (order.status or "").lower(),
        "total_price": float(order.total_price) if order.total_price is not None else None,
        "created_at": order.created_at,
    }
