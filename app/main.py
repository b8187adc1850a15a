import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import (
    CORS_ORIGINS,
    DATABASE_URL,
    DEV_ADMIN_EMAIL,
    DEV_ADMIN_PASSWORD,
    DEV_ADMIN_USERNAME,
    ENV,
)
from app.core.database import Base, SessionLocal, engine
from app.core.errors import register_exception_handlers
from app.core.logging_setup import configure_logging
from app.core.startup_checks import (
    ensure_migrations_applied,
    validate_database_environment,
    validate_security_settings,
)
from app.middleware.observability import ObservabilityMiddleware
import app.models  # garante que os models são importados antes do create_all

from app.services.auth_service import upsert_admin_user
from app.routers.auth import router as auth_router
from app.routers.cars import router as cars_router
from app.routers.orders import router as orders_router
from app.routers.users import router as users_router

configure_logging()

logger = logging.getLogger(__name__)
BOOTSTRAP_PREFIX = "[ADMIN_BOOTSTRAP]"
REPO_ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_CONFIG_PATH = Path(
    os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini"))
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Car Rental API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)
register_exception_handlers(app)


def _bootstrap_initial_admin() -> None:
    if not DEV_ADMIN_PASSWORD:
        logger.info("%s skipped: configure DEV_ADMIN_PASSWORD.", BOOTSTRAP_PREFIX)
        return

    logger.info("%s start email=%s", BOOTSTRAP_PREFIX, DEV_ADMIN_EMAIL)
    db = SessionLocal()
    try:
        admin, created = upsert_admin_user(
            db,
            email=DEV_ADMIN_EMAIL,
            username=DEV_ADMIN_USERNAME,
            password=DEV_ADMIN_PASSWORD,
        )
        logger.info(
            "%s %s id=%s email=%s",
            BOOTSTRAP_PREFIX,
            "created" if created else "updated",
            admin.id,
            admin.email,
        )
    except Exception:
        logger.exception("%s ERROR bootstrap failed", BOOTSTRAP_PREFIX)
        raise
    finally:
        db.close()


def _startup_tasks() -> None:
    logger.info("Car Rental API starting env=%s", ENV)
    try:
        validate_database_environment()
        validate_security_settings()
        if DATABASE_URL.startswith("sqlite"):
            # Em dev cria as tabelas direto; em produção, use migrations.
            Base.metadata.create_all(bind=engine)
        else:
            ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
        _bootstrap_initial_admin()
    except Exception:
        logger.exception("ERROR startup failed")
        raise


# Routers
app.include_router(auth_router)
app.include_router(cars_router)
app.include_router(orders_router)
app.include_router(users_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
