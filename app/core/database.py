"""
Conexão com o banco, sessão por request e Base declarativa.
SQLite em dev/teste, PostgreSQL em produção (via DATABASE_URL).
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import DATABASE_URL

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args,
    pool_pre_ping=True,  # reconecta se a conexão cair
    echo=False,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency do FastAPI: abre uma sessão e fecha ao final do request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
