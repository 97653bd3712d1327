import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    if val is None or val.strip() == "":
        raise RuntimeError(f"Missing required environment variable: {name}")
    return val.strip()


def _parse_origins(raw: str) -> list[str]:
    raw = (raw or "").strip()
    if not raw:
        return ["*"]
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def database_url() -> str:
    return _get_env("DATABASE_URL", "sqlite:///./helpportal.db")


def cors_origins() -> list[str]:
    return _parse_origins(os.getenv("CORS_ORIGINS", "*"))


def log_level() -> str:
    return _get_env("LOG_LEVEL", "INFO").upper()


def port() -> int:
    return int(_get_env("PORT", "8000"))


def api_url() -> str:
    return _get_env("PORTAL_API_URL", "http://localhost:8000").rstrip("/")
