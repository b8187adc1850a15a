import os
from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./car_rental.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_TEST = ENV_NORMALIZED == "test"
IS_PROD = ENV_NORMALIZED in {"prod", "production"}

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

# Auth (JWT)
DEV_JWT_SECRET_KEY = "dev-only-insecure-jwt-secret"
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "").strip()
JWT_SECRET_KEY_SOURCE = "env" if JWT_SECRET_KEY else "none"
if not JWT_SECRET_KEY and (IS_DEV or IS_TEST):
    JWT_SECRET_KEY = DEV_JWT_SECRET_KEY
    JWT_SECRET_KEY_SOURCE = "dev-default"
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "60"))

ACCESS_TOKEN_COOKIE_SECURE = os.getenv(
    "ACCESS_TOKEN_COOKIE_SECURE",
    "0" if IS_DEV or IS_TEST else "1",
).strip().lower() in {"1", "true", "yes", "on"}
ACCESS_TOKEN_COOKIE_SAMESITE = os.getenv("ACCESS_TOKEN_COOKIE_SAMESITE", "lax").strip().lower()
if ACCESS_TOKEN_COOKIE_SAMESITE not in {"lax", "strict", "none"}:
    ACCESS_TOKEN_COOKIE_SAMESITE = "lax"
# Browsers rejeitam SameSite=None sem Secure.
if ACCESS_TOKEN_COOKIE_SAMESITE == "none" and not ACCESS_TOKEN_COOKIE_SECURE:
    ACCESS_TOKEN_COOKIE_SAMESITE = "lax"

# Bootstrap do primeiro ADMIN
DEV_ADMIN_EMAIL = os.getenv("DEV_ADMIN_EMAIL", "admin@carrental.com").strip()
DEV_ADMIN_USERNAME = os.getenv("DEV_ADMIN_USERNAME", "admin").strip()
DEV_ADMIN_PASSWORD = os.getenv("DEV_ADMIN_PASSWORD", "").strip()
DEV_BOOTSTRAP_ALLOW = os.getenv("DEV_BOOTSTRAP_ALLOW", "").strip().lower() in {
    "1",
    "true",
    "yes",
    "on",
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
