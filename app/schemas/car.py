from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from app.models.car import Car


class CarCreate(BaseModel):
    make: str = Field(..., min_length=1, max_length=80)
    model: str = Field(..., min_length=1, max_length=80)
    year: int = Field(..., ge=1900, le=2100)
    price_per_day: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class CarRead(BaseModel):
    id: int
    make: str
    model: str
    year: int
    price_per_day: float
    is_available: bool
    current_order_id: Optional[int] = None


def car_to_dict(car: Car) -> Dict[str, Any]:
    return {
        "id": car.id,
        "make": car.make,
        "model": car.model,
        "year": car.year,
        "price_per_day": float(car.price_per_day) if car.price_per_day is not None else None,
        "is_available": bool(car.is_available),
        "current_order_id": car.current_order_id,
    }
