from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar
from urllib.parse import quote

from ..http_client import HttpClient
from ..normalizers import RawPage, ensure_success, normalize_listing, unwrap_record


@dataclass
class ResourceClient:
    http: HttpClient

    resource: ClassVar[str] = ""
    collection_keys: ClassVar[tuple[str, ...]] = ()
    record_keys: ClassVar[tuple[str, ...]] = ()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        return self.http.request(method, path, **kwargs)

    def _record_path(self, record_id: str) -> str:
        return f"/{self.resource}/{quote(str(record_id), safe='')}"

    def list_page(
        self,
        page: int = 1,
        page_size: int = 20,
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> RawPage:
        payload = self._request(
            "GET",
            f"/{self.resource}",
            params={"page": page, "limit": page_size},
            context_key=context_key,
            context_version=context_version,
        )
        return normalize_listing(
            payload, page=page, page_size=page_size, collection_keys=self.collection_keys
        )

    def get(
        self,
        record_id: str,
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> dict[str, Any]:
        payload = self._request(
            "GET",
            self._record_path(record_id),
            context_key=context_key,
            context_version=context_version,
        )
        return unwrap_record(payload, self.record_keys)

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = self._request("POST", f"/{self.resource}", json_body=payload)
        return unwrap_record(response, self.record_keys)

    def update(self, record_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        response = self._request("PUT", self._record_path(record_id), json_body=payload)
        return unwrap_record(response, self.record_keys)

    def delete(self, record_id: str) -> None:
        ensure_success(self._request("DELETE", self._record_path(record_id)))
