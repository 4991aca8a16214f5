from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = BASE_DIR / "src"

sys.path.insert(0, str(SRC_DIR))

from thrive_admin.config import ClientConfig  # noqa: E402
from thrive_admin.http_client import HttpClient  # noqa: E402

BASE_URL = "https://api.example.com/functions/v1/api/admin"
STORAGE_URL = "https://storage.example.com/storage/v1"


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def storage_url() -> str:
    return STORAGE_URL


@pytest.fixture
def make_config() -> Callable[..., ClientConfig]:
    def _make(**overrides: Any) -> ClientConfig:
        values: dict[str, Any] = {
            "env_name": "test",
            "api_base_url": BASE_URL,
            "admin_secret": "s3cret",
            "storage_url": STORAGE_URL,
        }
        values.update(overrides)
        return ClientConfig(**values)

    return _make


@pytest.fixture
def config(make_config: Callable[..., ClientConfig]) -> ClientConfig:
    return make_config()


@pytest.fixture
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config)
