from __future__ import annotations

import base64
import logging
from dataclasses import dataclass

from ..exceptions import ApiError, NotReadyError, ValidationError
from ..http_client import HttpClient
from ..image_utils import ImageFile, build_object_path, object_path_from_url, validate_image
from ..logger import get_logger, log_action

logger = get_logger("thrive_admin.clients.storage")


@dataclass(frozen=True)
class UploadResult:
    success: bool
    url: str | None = None
    path: str | None = None
    error: str | None = None


@dataclass
class StorageClient:
    http: HttpClient
    storage_url: str
    default_bucket: str = "beneficiary-images"

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.storage_url.rstrip('/')}/object/public/{bucket}/{path}"

    def upload_image(self, image: ImageFile, *, folder: str, bucket: str | None = None) -> UploadResult:
        target_bucket = bucket or self.default_bucket
        if not self.storage_url:
            return UploadResult(success=False, error="Image storage is not configured.")
        try:
            validate_image(image)
        except ValidationError as exc:
            return UploadResult(success=False, error=exc.issues[0].reason)

        path = build_object_path(folder, image)
        body = {
            "bucket": target_bucket,
            "path": path,
            "contentType": image.content_type,
            "data": base64.b64encode(image.content).decode("ascii"),
        }
        try:
            payload = self.http.request(
                "POST",
                "/upload",
                json_body=body,
                base_url=self.storage_url,
                include_admin_secret=False,
            )
        except ApiError as exc:
            error = self._describe(exc, target_bucket)
            log_action(logger, "storage", "upload_image", path, "error", error, level=logging.WARNING)
            return UploadResult(success=False, path=path, error=error)

        url = payload.get("url") if isinstance(payload, dict) else None
        if isinstance(payload, dict) and payload.get("success") is False:
            error = str(payload.get("error") or "Upload failed")
            log_action(logger, "storage", "upload_image", path, "error", error, level=logging.WARNING)
            return UploadResult(success=False, path=path, error=error)
        log_action(logger, "storage", "upload_image", path, "success")
        return UploadResult(success=True, url=url or self.public_url(target_bucket, path), path=path)

    def delete_image(self, url: str) -> UploadResult:
        if not self.storage_url:
            return UploadResult(success=False, error="Image storage is not configured.")
        path = object_path_from_url(url)
        if not path:
            return UploadResult(success=False, error="Could not derive a storage path from the URL.")
        try:
            self.http.request(
                "DELETE", f"/object/{path}", base_url=self.storage_url, include_admin_secret=False
            )
        except ApiError as exc:
            error = self._describe(exc, path.split("/", 1)[0])
            log_action(logger, "storage", "delete_image", path, "error", error, level=logging.WARNING)
            return UploadResult(success=False, path=path, error=error)
        log_action(logger, "storage", "delete_image", path, "success")
        return UploadResult(success=True, path=path)

    @staticmethod
    def _describe(exc: ApiError, bucket: str) -> str:
        if isinstance(exc, NotReadyError):
            return f"Storage bucket '{bucket}' not found."
        if exc.status_code in {401, 403}:
            return "Access denied. Please check storage permissions."
        return exc.message
