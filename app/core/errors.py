from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Erro de negócio com status HTTP associado (mapeado na borda)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Erro interno"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recurso não encontrado"


class InvalidRequestError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Requisição inválida"


class UnauthorizedError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Não autenticado"


class InvalidCredentialsError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Credenciais inválidas"


class DuplicateEmailError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "E-mail já cadastrado"


class InvalidTokenError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token inválido"


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning(
        "Domain error (%s) on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # payload malformado conta como requisição inválida (400), não 422
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
    logger.warning("Validation error on %s %s fields=%s", request.method, request.url.path, fields)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
