from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from app.core.errors import UnauthorizedError
from app.core.request_context import clear_request_context, get_user_email
from app.deps import get_current_identity, require_identity, resolve_identity
from app.services.tokens import TokenService
from tests.fixtures_data import TEST_JWT_SECRET

TOKENS = TokenService(secret_key=TEST_JWT_SECRET)
USER = SimpleNamespace(id=1, email="a@x.com")


def _request(cookie: str | None = None, path: str = "/orders") -> Request:
    headers = []
    if cookie is not None:
        headers.append((b"cookie", f"access_token={cookie}".encode()))
    scope = {
        "type": "http",
        "method": "POST",
        "path": path,
        "headers": headers,
        "query_string": b"",
        "scheme": "http",
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 12345),
    }
    return Request(scope)


def test_resolve_identity_without_token_is_anonymous():
    assert resolve_identity(None, TOKENS) is None
    assert resolve_identity("", TOKENS) is None


def test_resolve_identity_with_garbage_token_is_anonymous():
    assert resolve_identity("garbage", TOKENS) is None


def test_resolve_identity_with_expired_token_is_anonymous():
    issued_at = datetime.now(timezone.utc) - timedelta(days=1)
    expired = TokenService(secret_key=TEST_JWT_SECRET, clock=lambda: issued_at).issue(USER)

    assert resolve_identity(expired, TOKENS) is None


def test_resolve_identity_with_valid_token_returns_email():
    assert resolve_identity(TOKENS.issue(USER), TOKENS) == "a@x.com"


def test_get_current_identity_reads_cookie_and_sets_context():
    clear_request_context()
    request = _request(cookie=TOKENS.issue(USER))

    identity = get_current_identity(request, tokens=TOKENS)

    assert identity == "a@x.com"
    assert request.state.identity == "a@x.com"
    assert get_user_email() == "a@x.com"
    clear_request_context()


def test_get_current_identity_without_cookie_is_anonymous():
    request = _request()

    assert get_current_identity(request, tokens=TOKENS) is None
    assert request.state.identity is None


def test_require_identity_rejects_anonymous_request():
    with pytest.raises(UnauthorizedError) as exc_info:
        require_identity(_request(), identity=None)

    assert exc_info.value.status_code == 401


def test_require_identity_passes_authenticated_email_through():
    assert require_identity(_request(), identity="a@x.com") == "a@x.com"
