from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    admin_secret: str
    api_key: str = ""
    connect_timeout_seconds: float = 3.0
    fetch_timeout_seconds: float = 3.0
    write_timeout_seconds: float = 15.0
    max_connections: int = 10
    verify_ssl: bool = True
    storage_url: str = ""
    storage_bucket: str = "beneficiary-images"
    log_level: str = "INFO"

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def storage_enabled(self) -> bool:
        return bool(self.storage_url)


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _read_positive(name: str, default: str) -> float:
    value = _read_float(name, default)
    _validate(value > 0, f"Invalid {name}: expected > 0, got {value}")
    return value


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("THRIVE_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"THRIVE_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("THRIVE_API_BASE_URL") or "").strip()
    )
    admin_secret = (os.getenv("THRIVE_ADMIN_SECRET") or "").strip()
    _require(
        {"THRIVE_API_BASE_URL": api_base_url, "THRIVE_ADMIN_SECRET": admin_secret},
        ["THRIVE_API_BASE_URL", "THRIVE_ADMIN_SECRET"],
    )
    _validate(
        api_base_url.startswith(("http://", "https://")),
        f"Invalid THRIVE_API_BASE_URL: expected an http(s) URL, got {api_base_url!r}",
    )

    connect_timeout_seconds = _read_positive("THRIVE_CONNECT_TIMEOUT_SECONDS", "3")
    fetch_timeout_seconds = _read_positive("THRIVE_FETCH_TIMEOUT_SECONDS", "3")
    write_timeout_seconds = _read_positive("THRIVE_WRITE_TIMEOUT_SECONDS", "15")

    max_connections = _read_int("THRIVE_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid THRIVE_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    log_level = (os.getenv("THRIVE_LOG_LEVEL") or "INFO").strip().upper()
    _validate(
        log_level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
        f"Invalid THRIVE_LOG_LEVEL: got {log_level!r}",
    )

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        admin_secret=admin_secret,
        api_key=(os.getenv("THRIVE_API_KEY") or "").strip(),
        connect_timeout_seconds=connect_timeout_seconds,
        fetch_timeout_seconds=fetch_timeout_seconds,
        write_timeout_seconds=write_timeout_seconds,
        max_connections=max_connections,
        verify_ssl=_coerce_bool(os.getenv("THRIVE_VERIFY_SSL"), True),
        storage_url=(os.getenv("THRIVE_STORAGE_URL") or "").strip().rstrip("/"),
        storage_bucket=(os.getenv("THRIVE_STORAGE_BUCKET") or "beneficiary-images").strip(),
        log_level=log_level,
    )
