from __future__ import annotations

from contextvars import ContextVar


_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_USER_EMAIL_CTX: ContextVar[str | None] = ContextVar("user_email", default=None)


def set_request_context(*, request_id: str | None = None, user_email: str | None = None) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if user_email is not None:
        _USER_EMAIL_CTX.set(user_email)


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


def get_user_email() -> str | None:
    return _USER_EMAIL_CTX.get()


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _USER_EMAIL_CTX.set(None)
