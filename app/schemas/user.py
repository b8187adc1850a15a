from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel

from app.models.user import User


class UserRead(BaseModel):
    id: int
    email: str
    username: str
    role: str


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "username": user.username,
        "role": user.role,
    }
