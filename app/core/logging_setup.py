from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict

from app.core.config import LOG_LEVEL
from app.core.request_context import get_request_id, get_user_email

# "Authorization: Bearer <jwt>" e pares chave=valor / chave: valor
_BEARER = re.compile(r"(bearer\s+)[A-Za-z0-9\-_.=]+", re.IGNORECASE)
_SECRET_PAIR = re.compile(
    r"((?:access_token|token|password|secret)\s*[:=]\s*)[^\s\",;}]+",
    re.IGNORECASE,
)

# campos opcionais vindos do middleware via extra=
_REQUEST_FIELDS = ("endpoint", "method", "status_code")


def mask_secrets(text: str) -> str:
    return _SECRET_PAIR.sub(r"\1***", _BEARER.sub(r"\1***", text))


class JsonFormatter(logging.Formatter):
    """Uma linha JSON por registro, com request_id/usuário do contexto."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "request_id": getattr(record, "request_id", None) or get_request_id(),
            "user": getattr(record, "user", None) or get_user_email(),
            "message": mask_secrets(record.getMessage()),
            "duration_ms": getattr(record, "duration_ms", None),
        }
        entry.update(
            (field, getattr(record, field))
            for field in _REQUEST_FIELDS
            if getattr(record, field, None) is not None
        )
        if record.exc_info:
            entry["exception"] = mask_secrets(self.formatException(record.exc_info))
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(level: str = LOG_LEVEL) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    # uvicorn tem handlers próprios; só alinha o nível
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
