#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from app.core.config import DEV_BOOTSTRAP_ALLOW, IS_DEV  # noqa: E402
from app.core.database import SessionLocal  # noqa: E402
from app.services.auth_service import upsert_admin_user  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cria ou promove um usuário ADMIN.")
    parser.add_argument("--email", required=True, help="Email do admin")
    parser.add_argument("--password", help="Senha do admin (obrigatória se o usuário não existir)")
    parser.add_argument("--username", default="admin", help="Nome de usuário exibido")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Permite executar sem DEV_BOOTSTRAP_ALLOW=1",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if not DEV_BOOTSTRAP_ALLOW and not args.force:
        print(
            "Bootstrap desabilitado. "
            "Defina DEV_BOOTSTRAP_ALLOW=1 ou use --force."
        )
        return 1

    db = SessionLocal()
    try:
        admin, created = upsert_admin_user(
            db,
            email=args.email,
            username=args.username,
            password=args.password,
        )
    except ValueError as exc:
        print(str(exc))
        return 1
    finally:
        db.close()

    action = "created" if created else "updated"
    print(f"Admin {action}: id={admin.id} email={admin.email} role={admin.role}")
    if IS_DEV and args.password:
        print(f"Resumo DEV -> Email: {admin.email} | Senha: {args.password}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
