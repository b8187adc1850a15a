from __future__ import annotations

from typing import Any

from fastapi import Response

from app.core.config import ACCESS_TOKEN_COOKIE_SAMESITE, ACCESS_TOKEN_COOKIE_SECURE

ACCESS_TOKEN_COOKIE = "access_token"


def build_access_cookie_options() -> dict[str, Any]:
    return {
        "httponly": True,
        "samesite": ACCESS_TOKEN_COOKIE_SAMESITE,
        "path": "/",
        "secure": ACCESS_TOKEN_COOKIE_SECURE,
    }


def set_access_token_cookie(response: Response, token: str, max_age: int) -> None:
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        max_age=max_age,
        **build_access_cookie_options(),
    )


def clear_access_token_cookie(response: Response) -> None:
    # Logout é só do lado do cliente: o token continua válido até expirar.
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value="",
        max_age=0,
        **build_access_cookie_options(),
    )
