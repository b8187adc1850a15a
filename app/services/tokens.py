"""
Emissão e validação do token de acesso (JWT assinado com HMAC).

O token carrega só o e-mail do usuário em "sub", mais "iat" e "exp".
Nada é persistido: a validade depende apenas da assinatura e do relógio.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from jose import JWTError, jwt

from app.core.config import JWT_ALGORITHM, JWT_EXPIRE_MINUTES, JWT_SECRET_KEY
from app.core.errors import InvalidTokenError

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        clock: Clock = _utcnow,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self._clock = clock

    @property
    def max_age_seconds(self) -> int:
        return max(int(self.expire_minutes * 60), 0)

    def _require_secret(self) -> str:
        if not self.secret_key:
            raise RuntimeError("JWT_SECRET_KEY não configurado.")
        return self.secret_key

    def issue(self, user: Any) -> str:
        """
        IMPORTANTE: "sub" precisa ser STRING (senão dá 'Subject must be a string').
        """
        now = self._clock()
        exp = now + timedelta(minutes=self.expire_minutes)
        payload: Dict[str, Any] = {
            "sub": str(user.email),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self._require_secret(), algorithm=self.algorithm)

    def _claims(self, token: str) -> Dict[str, Any]:
        # Expiração é checada em is_valid; aqui só assinatura/formato.
        try:
            return jwt.decode(
                token,
                self._require_secret(),
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidTokenError("Token inválido") from exc

    def subject(self, token: str) -> str:
        sub = self._claims(token).get("sub")
        if not isinstance(sub, str) or not sub:
            raise InvalidTokenError("Token sem subject")
        return sub

    def expires_at(self, token: str) -> datetime:
        exp = self._claims(token).get("exp")
        if exp is None:
            raise InvalidTokenError("Token sem expiração")
        try:
            return datetime.fromtimestamp(int(exp), tz=timezone.utc)
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError("Expiração inválida") from exc

    def is_valid(self, token: str, expected_subject: Optional[str]) -> bool:
        """True só se assinatura confere, não expirou e o subject bate. Nunca levanta."""
        if not token or not expected_subject:
            return False
        try:
            payload = self._claims(token)
        except (InvalidTokenError, RuntimeError):
            return False

        # Válido até o segundo de "exp", inclusive.
        try:
            exp = int(payload.get("exp"))
        except (TypeError, ValueError):
            return False
        if exp < int(self._clock().timestamp()):
            return False
        return payload.get("sub") == expected_subject


_default_service: Optional[TokenService] = None


def get_token_service() -> TokenService:
    """Dependency do FastAPI; testes sobrescrevem com um TokenService próprio."""
    global _default_service
    if _default_service is None:
        _default_service = TokenService(
            secret_key=JWT_SECRET_KEY,
            algorithm=JWT_ALGORITHM,
            expire_minutes=JWT_EXPIRE_MINUTES,
        )
    return _default_service
