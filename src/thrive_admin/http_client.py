from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from typing import Any, Iterator
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import HttpError, NetworkError, RequestCancelled
from .logger import get_logger

ADMIN_SECRET_HEADER = "X-Admin-Secret"

logger = get_logger("thrive_admin.http")


@dataclass
class LastOperation:
    method: str
    path: str
    duration_ms: int
    result: str
    status_code: int


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    _context_versions: dict[str, int] | None = None
    last_operation: LastOperation | None = None
    _context_counter: Iterator[int] | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
                max_retries=0,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        if self._context_versions is None:
            self._context_versions = {}
        if self._context_counter is None:
            self._context_counter = itertools.count(1)

    def _build_url(self, path: str, base_url: str | None = None) -> str:
        base = (base_url or self.config.api_base_url).rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def static_headers(self, *, include_admin_secret: bool = True) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if include_admin_secret:
            headers[ADMIN_SECRET_HEADER] = self.config.admin_secret
        if self.config.api_key:
            headers["apikey"] = self.config.api_key
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        base_url: str | None = None,
        context_key: str | None = None,
        context_version: int | None = None,
        include_admin_secret: bool = True,
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = self.static_headers(include_admin_secret=include_admin_secret)
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path, base_url)
        read_timeout = (
            self.config.fetch_timeout_seconds
            if normalized_method in {"GET", "HEAD"}
            else self.config.write_timeout_seconds
        )
        if context_key and context_version is None:
            context_version = self.get_context_version(context_key)

        started = time.monotonic()
        try:
            response = self.session.request(
                method=normalized_method,
                url=url,
                headers=request_headers,
                json=json_body,
                params=params,
                timeout=(self.config.connect_timeout_seconds, read_timeout),
                verify=self.config.verify_ssl,
            )
        except requests.Timeout as exc:
            self._record(normalized_method, path, started, "timeout", 0)
            raise NetworkError(
                code="TIMEOUT_ERROR",
                message=f"No response within {read_timeout:g}s",
                details={"type": type(exc).__name__},
                status_code=0,
            ) from exc
        except requests.RequestException as exc:
            self._record(normalized_method, path, started, "network_error", 0)
            raise NetworkError(
                code="NETWORK_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
                status_code=0,
            ) from exc

        if context_key and not self._context_is_current(context_key, context_version):
            self._record(normalized_method, path, started, "cancelled", response.status_code)
            raise RequestCancelled(
                code="REQUEST_CANCELLED",
                message="Response discarded because its view was closed",
                details={"context": context_key},
                status_code=0,
            )

        try:
            payload = self._decode(response)
        except ValueError as exc:
            if response.ok:
                self._record(normalized_method, path, started, "invalid_json", response.status_code)
                raise HttpError(
                    code="INVALID_JSON",
                    message="Failed to parse API response as JSON",
                    details={"body": response.text[:200]},
                    status_code=response.status_code,
                ) from exc
            payload = {"message": response.text[:200]}
        if response.ok:
            self._record(normalized_method, path, started, "success", response.status_code)
            return payload
        self._record(normalized_method, path, started, "error", response.status_code)
        raise map_error(response.status_code, payload if isinstance(payload, dict) else None)

    @staticmethod
    def _decode(response: requests.Response) -> dict[str, Any] | list[Any] | None:
        if not response.content:
            return None
        return response.json()

    def _record(self, method: str, path: str, started: float, result: str, status_code: int) -> None:
        duration_ms = int((time.monotonic() - started) * 1000)
        self.last_operation = LastOperation(
            method=method,
            path=path,
            duration_ms=duration_ms,
            result=result,
            status_code=status_code,
        )
        logger.debug(
            "http %s %s -> %s (%s) %sms", method, path, status_code, result, duration_ms
        )

    def get_context_version(self, context_key: str) -> int:
        if self._context_versions is None:
            self._context_versions = {}
        return self._context_versions.get(context_key, 0)

    def _next_version(self) -> int:
        if self._context_counter is None:
            self._context_counter = itertools.count(1)
        return next(self._context_counter)

    def open_context(self, context_key: str) -> int:
        return self.bump_context(context_key)

    def bump_context(self, context_key: str) -> int:
        # Unique per client; a released key reads as 0 and matches no open request.
        version = self._next_version()
        if self._context_versions is None:
            self._context_versions = {}
        self._context_versions[context_key] = version
        return version

    def release_context(self, context_key: str) -> None:
        if self._context_versions is not None:
            self._context_versions.pop(context_key, None)

    def _context_is_current(self, context_key: str, context_version: int | None) -> bool:
        if context_version is None:
            return True
        return self.get_context_version(context_key) == context_version
