from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateEmailError, InvalidCredentialsError, NotFoundError
from app.models.user import Role, User
from app.services.passwords import hash_password, password_looks_hashed, verify_password
from app.services.tokens import TokenService

logger = logging.getLogger(__name__)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def find_user_by_email(db: Session, email: str | None) -> Optional[User]:
    normalized = normalize_email(email)
    if not normalized:
        return None
    return db.query(User).filter(func.lower(User.email) == normalized).first()


def get_user_by_email(db: Session, email: str | None) -> User:
    user = find_user_by_email(db, email)
    if user is None:
        raise NotFoundError(f"Usuário não encontrado: {email}")
    return user


def login(db: Session, email: str, password: str, tokens: TokenService) -> str:
    logger.info("Login attempt email=%s", normalize_email(email))
    user = find_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Login failed email=%s", normalize_email(email))
        raise InvalidCredentialsError("E-mail ou senha inválidos")

    logger.info("Login success user_id=%s", user.id)
    return tokens.issue(user)


def signup(db: Session, email: str, username: str, password: str, tokens: TokenService) -> str:
    # guardado como veio (sem lower): vira o subject do token
    account_email = (email or "").strip()
    logger.info("Signup attempt email=%s", account_email)

    if find_user_by_email(db, account_email) is not None:
        logger.warning("Signup failed: email already registered email=%s", account_email)
        raise DuplicateEmailError()

    user = User(
        email=account_email,
        username=username.strip(),
        password_hash=hash_password(password),
        role=Role.USER.value,
    )
    try:
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        # corrida entre dois signups com o mesmo e-mail
        db.rollback()
        raise DuplicateEmailError() from exc
    db.refresh(user)

    logger.info("Signup success user_id=%s", user.id)
    return tokens.issue(user)


def upsert_admin_user(
    db: Session,
    *,
    email: str,
    username: str,
    password: str | None,
) -> tuple[User, bool]:
    """Cria (ou promove) um usuário ADMIN. Retorna (user, created)."""
    account_email = (email or "").strip()
    if not account_email:
        raise ValueError("E-mail do admin é obrigatório")

    user = find_user_by_email(db, account_email)
    created = user is None
    if created:
        if not password:
            raise ValueError("Senha obrigatória para criar o admin")
        user = User(email=account_email, username=username or account_email, password_hash="")
        db.add(user)

    user.role = Role.ADMIN.value
    if username:
        user.username = username
    if password:
        user.password_hash = password if password_looks_hashed(password) else hash_password(password)

    db.commit()
    db.refresh(user)
    return user, created
