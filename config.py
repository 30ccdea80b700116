# config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import make_url

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "inventory"
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    connect_timeout: int = 10
    log_level: str = "INFO"
    allow_fractional_quantity_on_create: bool = False


def _split_origins(value: Optional[str]) -> List[str]:
    if not value:
        return ["*"]
    origins = [o.strip() for o in value.split(",") if o.strip()]
    return origins or ["*"]


def get_settings() -> Settings:
    """Read settings from the environment (and .env, if present)."""
    db = {
        "db_host": os.getenv("DATABASE_HOST", "localhost"),
        "db_port": _get_int("DATABASE_PORT", 3306),
        "db_user": os.getenv("DATABASE_USER", "root"),
        "db_password": os.getenv("DATABASE_PASSWORD", ""),
        "db_name": os.getenv("DATABASE_NAME", "inventory"),
    }

    # DATABASE_URL wins over the individual parts
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        url = make_url(database_url)
        db = {
            "db_host": url.host or db["db_host"],
            "db_port": url.port or db["db_port"],
            "db_user": url.username or db["db_user"],
            "db_password": url.password or "",
            "db_name": url.database or db["db_name"],
        }

    return Settings(
        port=_get_int("PORT", 3000),
        cors_origins=_split_origins(os.getenv("CORS_ORIGIN")),
        pool_size=_get_int("DB_POOL_SIZE", 5),
        max_overflow=_get_int("DB_MAX_OVERFLOW", 10),
        pool_timeout=_get_int("DB_POOL_TIMEOUT", 30),
        connect_timeout=_get_int("DB_CONNECT_TIMEOUT", 10),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        allow_fractional_quantity_on_create=_get_bool("ALLOW_FRACTIONAL_QUANTITY_ON_CREATE"),
        **db,
    )
