# app/deps.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request

from app.core.errors import InvalidTokenError, UnauthorizedError
from app.core.request_context import set_request_context
from app.services.access_cookie import ACCESS_TOKEN_COOKIE
from app.services.tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)


def resolve_identity(token: Optional[str], tokens: TokenService) -> Optional[str]:
    """Token ausente, inválido ou expirado -> None (anônimo); senão o e-mail do subject."""
    if not token:
        return None
    try:
        email = tokens.subject(token)
    except (InvalidTokenError, RuntimeError):
        logger.debug("Access token rejected: invalid signature or format")
        return None
    if not tokens.is_valid(token, email):
        logger.debug("Access token rejected: expired")
        return None
    return email


def get_current_identity(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> Optional[str]:
    """Lê o cookie de acesso e devolve o e-mail autenticado (ou None)."""
    email = resolve_identity(request.cookies.get(ACCESS_TOKEN_COOKIE), tokens)
    request.state.identity = email
    if email:
        set_request_context(user_email=email)
    return email


def require_identity(
    request: Request,
    identity: Optional[str] = Depends(get_current_identity),
) -> str:
    if not identity:
        logger.warning("Unauthenticated access to %s %s", request.method, request.url.path)
        raise UnauthorizedError("Autenticação necessária")
    return identity
