import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.database import Base
from app.core.errors import DuplicateEmailError, InvalidCredentialsError, NotFoundError
from app.models.user import Role, User
from app.services import auth_service
from app.services.passwords import verify_password
from app.services.tokens import TokenService
from tests.fixtures_data import HAPPY_PATH_USER, TEST_JWT_SECRET

TOKENS = TokenService(secret_key=TEST_JWT_SECRET)


def _build_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return testing_session_local()


def _signup(db, **overrides):
    data = {**HAPPY_PATH_USER, **overrides}
    return auth_service.signup(db, data["email"], data["username"], data["password"], TOKENS)


def test_signup_creates_user_and_returns_token_for_email():
    db = _build_session()

    token = _signup(db)

    assert TOKENS.subject(token) == HAPPY_PATH_USER["email"]
    assert TOKENS.is_valid(token, HAPPY_PATH_USER["email"]) is True
    user = db.query(User).filter(User.email == HAPPY_PATH_USER["email"]).one()
    assert user.username == HAPPY_PATH_USER["username"]
    assert user.role == Role.USER.value
    assert user.password_hash != HAPPY_PATH_USER["password"]
    assert verify_password(HAPPY_PATH_USER["password"], user.password_hash)


def test_signup_with_registered_email_fails_without_touching_store():
    db = _build_session()
    _signup(db)

    with pytest.raises(DuplicateEmailError):
        _signup(db, username="someone-else", password="different-pass")

    users = db.query(User).all()
    assert len(users) == 1
    assert users[0].username == HAPPY_PATH_USER["username"]


def test_signup_duplicate_check_ignores_email_case():
    db = _build_session()
    _signup(db)

    with pytest.raises(DuplicateEmailError):
        _signup(db, email="A@X.COM")


def test_login_returns_token_for_account_email():
    db = _build_session()
    _signup(db)

    token = auth_service.login(db, HAPPY_PATH_USER["email"], HAPPY_PATH_USER["password"], TOKENS)

    assert TOKENS.subject(token) == HAPPY_PATH_USER["email"]


def test_login_with_wrong_password_fails():
    db = _build_session()
    _signup(db)

    with pytest.raises(InvalidCredentialsError):
        auth_service.login(db, HAPPY_PATH_USER["email"], "wrong-password", TOKENS)


def test_login_with_unknown_email_fails():
    db = _build_session()

    with pytest.raises(InvalidCredentialsError):
        auth_service.login(db, "nobody@example.com", "whatever", TOKENS)


def test_get_user_by_email_raises_not_found():
    db = _build_session()

    with pytest.raises(NotFoundError):
        auth_service.get_user_by_email(db, "nobody@example.com")


def test_upsert_admin_user_creates_then_promotes():
    db = _build_session()

    admin, created = auth_service.upsert_admin_user(
        db, email="root@example.com", username="root", password="admin-pass"
    )
    assert created is True
    assert admin.role == Role.ADMIN.value
    assert verify_password("admin-pass", admin.password_hash)

    _signup(db)
    promoted, created = auth_service.upsert_admin_user(
        db, email=HAPPY_PATH_USER["email"], username="", password=None
    )
    assert created is False
    assert promoted.role == Role.ADMIN.value
    assert verify_password(HAPPY_PATH_USER["password"], promoted.password_hash)


def test_upsert_admin_user_requires_password_for_new_user():
    db = _build_session()

    with pytest.raises(ValueError):
        auth_service.upsert_admin_user(db, email="root@example.com", username="root", password=None)


def test_signup_keeps_submitted_email_case_as_subject():
    db = _build_session()

    token = _signup(db, email="Alice.Smith@Example.com")

    assert TOKENS.subject(token) == "Alice.Smith@Example.com"
    assert db.query(User).one().email == "Alice.Smith@Example.com"

    login_token = auth_service.login(db, "alice.smith@example.com", HAPPY_PATH_USER["password"], TOKENS)
    assert TOKENS.subject(login_token) == "Alice.Smith@Example.com"
    assert auth_service.get_user_by_email(db, "ALICE.SMITH@EXAMPLE.COM").email == "Alice.Smith@Example.com"
