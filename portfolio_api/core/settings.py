from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "https://safasfly.dev", "https://www.safasfly.dev"]


def _env_bool(key: str, default: str = "1") -> bool:
    return os.getenv(key, default).strip().lower() not in ("0", "false", "no", "off")


def _env_positive_int(key: str, default: int) -> int:
    """Parse a positive integer env var; anything unparsable or <= 0 falls back to `default`."""
    raw = os.getenv(key, "")
    try:
        value = int(float(str(raw).strip()))
    except Exception:
        return default
    return value if value > 0 else default


def _env_list(key: str, default: List[str]) -> List[str]:
    raw = os.getenv(key, "").strip()
    if not raw:
        return list(default)
    if raw.startswith("["):
        try:
            v = json.loads(raw)
            if isinstance(v, list):
                items = [str(x).strip() for x in v if str(x).strip()]
                return items or list(default)
        except Exception:
            pass
    items = [x.strip() for x in raw.split(",") if x.strip()]
    return items or list(default)


def _default_db_path() -> str:
    explicit = os.getenv("DB_PATH", "").strip()
    if explicit:
        return explicit

    # Railway volumes are mounted at a runtime-provided path.
    mount = os.getenv("RAILWAY_VOLUME_MOUNT_PATH", "").strip()
    if mount:
        return f"{mount.rstrip('/')}/portfolio.db"

    return "./data/portfolio.db"


@dataclass(frozen=True, slots=True)
class Settings:
    env: str = field(default_factory=lambda: os.getenv("APP_ENV", "prod").strip())
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0").strip())
    port: int = field(default_factory=lambda: _env_positive_int("PORT", 3002))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").strip().upper())

    # Routes are mounted under this prefix ("" mounts at the root).
    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api").strip())

    # Storage
    db_path: str = field(default_factory=_default_db_path)
    db_echo: bool = field(default_factory=lambda: _env_bool("DB_ECHO", "0"))

    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))

    # Admin auth
    admin_session_ttl_days: int = field(default_factory=lambda: _env_positive_int("ADMIN_SESSION_TTL_DAYS", 30))
    seed_admin_email: str = field(default_factory=lambda: os.getenv("SEED_ADMIN_EMAIL", ""))
    seed_admin_password: str = field(default_factory=lambda: os.getenv("SEED_ADMIN_PASSWORD", ""))

    # Outbound contact notifications
    smtp_host: str = field(default_factory=lambda: os.getenv("SMTP_HOST", "").strip())
    smtp_port: int = field(default_factory=lambda: _env_positive_int("SMTP_PORT", 587))
    smtp_secure: bool = field(default_factory=lambda: os.getenv("SMTP_SECURE", "").strip().lower() == "true")
    smtp_user: str = field(default_factory=lambda: os.getenv("SMTP_USER", "").strip())
    smtp_pass: str = field(default_factory=lambda: os.getenv("SMTP_PASS", ""))
    contact_email: str = field(default_factory=lambda: os.getenv("CONTACT_EMAIL", "contact@safasfly.dev").strip())

    # Request limits / hardening
    max_request_size_bytes: int = field(default_factory=lambda: _env_positive_int("MAX_REQUEST_SIZE_BYTES", 1024 * 1024))

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "admin_session_ttl_days", max(1, int(self.admin_session_ttl_days)))
        object.__setattr__(self, "seed_admin_email", (self.seed_admin_email or "").strip().lower())
        prefix = (self.api_prefix or "").strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix
        object.__setattr__(self, "api_prefix", prefix)

    @property
    def is_dev(self) -> bool:
        return self.env.lower() in ("dev", "development", "local")

    @property
    def database_url(self) -> str:
        return f"sqlite:///{Path(self.db_path).expanduser().resolve()}"
