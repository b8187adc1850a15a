from __future__ import annotations

import bcrypt


# =========================
# PASSWORD (bcrypt direto, sem passlib)
# - evita erro do passlib com bcrypt 5.x
# - bcrypt só considera 72 bytes
# =========================
BCRYPT_MAX_BYTES = 72


def _normalize_password_for_bcrypt(password: str) -> bytes:
    pw = (password or "").encode("utf-8")
    if len(pw) <= BCRYPT_MAX_BYTES:
        return pw
    return pw[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    pw = _normalize_password_for_bcrypt(password)
    hashed = bcrypt.hashpw(pw, bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            _normalize_password_for_bcrypt(plain_password),
            password_hash.encode("utf-8"),
        )
    except ValueError:
        # hash corrompido / formato desconhecido
        return False


def password_looks_hashed(password: str) -> bool:
    return password.startswith(("$2a$", "$2b$", "$2y$"))
