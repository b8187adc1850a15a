from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.core.errors import InvalidTokenError
from app.services.tokens import TokenService
from tests.fixtures_data import TEST_JWT_SECRET

TTL_MINUTES = 60
USER = SimpleNamespace(id=1, email="test@example.com")


def _service(clock=None, secret=TEST_JWT_SECRET) -> TokenService:
    if clock is None:
        return TokenService(secret_key=secret, expire_minutes=TTL_MINUTES)
    return TokenService(secret_key=secret, expire_minutes=TTL_MINUTES, clock=clock)


def _frozen(moment: datetime):
    return lambda: moment


def test_issue_encodes_email_as_subject():
    tokens = _service()

    token = tokens.issue(USER)

    assert token
    assert tokens.subject(token) == "test@example.com"


def test_is_valid_for_fresh_token_and_matching_subject():
    tokens = _service()
    token = tokens.issue(USER)

    assert tokens.is_valid(token, "test@example.com") is True


def test_is_valid_false_for_other_subject():
    tokens = _service()
    token = tokens.issue(USER)

    assert tokens.is_valid(token, "wrong@example.com") is False


def test_is_valid_false_for_expired_token():
    issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
    token = _service(clock=_frozen(issued_at)).issue(USER)

    assert _service().is_valid(token, "test@example.com") is False


def test_token_valid_just_before_ttl_and_invalid_just_after():
    issued_at = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = _service(clock=_frozen(issued_at)).issue(USER)
    expiry = issued_at + timedelta(minutes=TTL_MINUTES)

    assert _service(clock=_frozen(expiry - timedelta(seconds=1))).is_valid(token, USER.email) is True
    assert _service(clock=_frozen(expiry)).is_valid(token, USER.email) is True
    assert _service(clock=_frozen(expiry + timedelta(seconds=1))).is_valid(token, USER.email) is False


def test_expires_at_is_issue_time_plus_ttl():
    issued_at = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = _service(clock=_frozen(issued_at)).issue(USER)

    assert _service().expires_at(token) == issued_at + timedelta(minutes=TTL_MINUTES)


def test_subject_rejects_malformed_token():
    with pytest.raises(InvalidTokenError):
        _service().subject("not-a-jwt")


def test_subject_rejects_token_signed_with_other_secret():
    token = _service(secret="some-other-secret-value").issue(USER)

    with pytest.raises(InvalidTokenError):
        _service().subject(token)
    assert _service().is_valid(token, USER.email) is False


def test_subject_rejects_tampered_signature():
    token = _service().issue(USER)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(InvalidTokenError):
        _service().subject(tampered)
    assert _service().is_valid(tampered, USER.email) is False


def test_subject_ignores_expiry():
    issued_at = datetime.now(timezone.utc) - timedelta(days=1)
    token = _service(clock=_frozen(issued_at)).issue(USER)

    assert _service().subject(token) == USER.email


def test_is_valid_never_raises_on_garbage():
    tokens = _service()

    assert tokens.is_valid("", USER.email) is False
    assert tokens.is_valid("garbage", USER.email) is False
    assert tokens.is_valid(tokens.issue(USER), None) is False


def test_missing_secret_fails_on_issue():
    tokens = TokenService(secret_key="")

    with pytest.raises(RuntimeError):
        tokens.issue(USER)


def test_max_age_matches_ttl():
    assert _service().max_age_seconds == TTL_MINUTES * 60
