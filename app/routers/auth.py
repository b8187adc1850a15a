# app/routers/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.auth import AuthResponse, LoginPayload, MessageResponse, SignupPayload
from app.services import auth_service
from app.services.access_cookie import clear_access_token_cookie, set_access_token_cookie
from app.services.tokens import TokenService, get_token_service

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginPayload,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    token = auth_service.login(db, payload.email, payload.password, tokens)
    set_access_token_cookie(response, token, max_age=tokens.max_age_seconds)
    return {"message": "Login successful", "access_token": token, "token_type": "bearer"}


@router.post("/signup", response_model=AuthResponse)
def signup(
    payload: SignupPayload,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    token = auth_service.signup(db, payload.email, payload.username, payload.password, tokens)
    set_access_token_cookie(response, token, max_age=tokens.max_age_seconds)
    return {"message": "Signup successful", "access_token": token, "token_type": "bearer"}


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response):
    """Só limpa o cookie: o servidor não guarda sessão para revogar."""
    logger.info("Logout request received")
    clear_access_token_cookie(response)
    return {"message": "Logout successful"}
