from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Mapping

from pydantic import BaseModel

from ..clients import BeneficiariesClient, DiscountsClient, StorageClient, VendorsClient
from ..exceptions import ApiError, PartialFailure, ValidationError, ValidationIssue
from ..image_utils import ImageFile
from ..logger import get_logger, log_action
from ..models import DISCOUNT_TYPES, implied_discount_value
from ..reconciler import (
    BENEFICIARY_SCHEMA,
    DISCOUNT_SCHEMA,
    VENDOR_SCHEMA,
    denormalize,
    is_empty,
    normalize,
    synthesize_location,
    validate_required,
)
from ..reconciler.engine import coerce_number

logger = get_logger("thrive_admin.application.onboarding")

DISCOUNT_PREFIX = "discount."
DISCOUNT_VALIDITY = timedelta(days=365)
VENDOR_IMAGE_KEYS = ("logo",)
BENEFICIARY_IMAGES = (("main_image", "main_image_url"), ("logo", "logo_url"))


@dataclass
class OnboardingResult:
    record: BaseModel
    discount: BaseModel | None = None
    committed: list[str] = field(default_factory=list)
    warnings: list[PartialFailure] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.warnings


def split_prefixed(values: Mapping[str, Any], prefix: str) -> dict[str, Any]:
    return {key[len(prefix):]: value for key, value in values.items() if key.startswith(prefix)}


def build_discount_payload(
    values: Mapping[str, Any],
    *,
    vendor_id: str | None = None,
    today: date | None = None,
) -> dict[str, Any]:
    data = dict(values)
    if vendor_id:
        data["vendor_id"] = vendor_id

    kind = str(data.get("discount_type") or "percentage").strip().lower()
    if kind not in DISCOUNT_TYPES:
        raise ValidationError(
            [ValidationIssue(field="discount_type", reason=f"Discount type must be one of {', '.join(DISCOUNT_TYPES)}")]
        )
    data["discount_type"] = kind
    value = implied_discount_value(kind, coerce_number(data.get("discount_value")))
    if value <= 0:
        raise ValidationError([ValidationIssue(field="discount_value", reason="Discount value must be greater than 0")])
    if kind == "percentage" and value > 100:
        raise ValidationError([ValidationIssue(field="discount_value", reason="Percentage cannot exceed 100")])
    data["discount_value"] = value

    start = today or date.today()
    if is_empty(data.get("start_date")):
        data["start_date"] = start.isoformat()
    if is_empty(data.get("end_date")):
        data["end_date"] = (start + DISCOUNT_VALIDITY).isoformat()
    data.setdefault("is_active", True)

    validate_required(data, DISCOUNT_SCHEMA)
    return denormalize(data, DISCOUNT_SCHEMA)


class VendorOnboardingUseCase:
    """Create a vendor, its first discount and its logo as three separate writes.

    Only the vendor write is fatal. Later failures leave the earlier writes in
    place and are reported as ``PartialFailure`` warnings.
    """

    def __init__(
        self,
        vendors: VendorsClient,
        discounts: DiscountsClient,
        storage: StorageClient | None = None,
    ) -> None:
        self.vendors = vendors
        self.discounts = discounts
        self.storage = storage

    def execute(self, values: Mapping[str, Any]) -> OnboardingResult:
        vendor_values = {
            key: value
            for key, value in values.items()
            if not key.startswith(DISCOUNT_PREFIX) and key not in VENDOR_IMAGE_KEYS
        }
        validate_required(vendor_values, VENDOR_SCHEMA)
        payload = denormalize(vendor_values, VENDOR_SCHEMA)
        created = self.vendors.create(payload)
        vendor = normalize(created or payload, VENDOR_SCHEMA)
        result = OnboardingResult(record=vendor, committed=["vendor"])
        log_action(logger, "vendor", "create", vendor.id, "success")

        discount_values = split_prefixed(values, DISCOUNT_PREFIX)
        if not is_empty(discount_values.get("title")):
            self._create_discount(result, discount_values)

        logo = values.get("logo")
        if isinstance(logo, ImageFile):
            self._attach_logo(result, logo)
        return result

    def _create_discount(self, result: OnboardingResult, values: dict[str, Any]) -> None:
        vendor_id = getattr(result.record, "id", "")
        try:
            payload = build_discount_payload(values, vendor_id=vendor_id)
            created = self.discounts.create(payload)
        except (ApiError, ValidationError) as exc:
            self._warn(result, "discount", exc)
            return
        result.discount = normalize(created or payload, DISCOUNT_SCHEMA)
        result.committed.append("discount")
        log_action(logger, "discount", "create", result.discount.id, "success")

    def _attach_logo(self, result: OnboardingResult, logo: ImageFile) -> None:
        vendor_id = getattr(result.record, "id", "")
        if not vendor_id:
            self._warn(result, "logo", RuntimeError("The created vendor has no id to attach a logo to."))
            return
        if self.storage is None:
            self._warn(result, "logo", RuntimeError("Image storage is not configured."))
            return
        upload = self.storage.upload_image(logo, folder=f"vendors/{vendor_id}")
        if not upload.success or not upload.url:
            self._warn(result, "logo", RuntimeError(upload.error or "Upload failed"))
            return
        try:
            self.vendors.update(vendor_id, denormalize({"logo_url": upload.url}, VENDOR_SCHEMA))
        except ApiError as exc:
            self._warn(result, "logo", exc)
            return
        result.record = result.record.model_copy(update={"logo_url": upload.url})
        result.committed.append("logo")

    @staticmethod
    def _warn(result: OnboardingResult, step: str, cause: BaseException) -> None:
        failure = PartialFailure(step=step, committed=list(result.committed), cause=cause)
        result.warnings.append(failure)
        log_action(
            logger,
            "vendor",
            f"create_{step}",
            getattr(result.record, "id", None),
            "partial_failure",
            str(failure),
            level=logging.WARNING,
        )


class BeneficiaryOnboardingUseCase:
    def __init__(self, beneficiaries: BeneficiariesClient, storage: StorageClient | None = None) -> None:
        self.beneficiaries = beneficiaries
        self.storage = storage

    def execute(self, values: Mapping[str, Any]) -> OnboardingResult:
        image_keys = {key for key, _ in BENEFICIARY_IMAGES}
        fields = {key: value for key, value in values.items() if key not in image_keys}
        validate_required(fields, BENEFICIARY_SCHEMA)

        warnings: list[PartialFailure] = []
        uploaded: list[str] = []
        for key, logical_name in BENEFICIARY_IMAGES:
            image = values.get(key)
            if not isinstance(image, ImageFile):
                continue
            if self.storage is None:
                warnings.append(PartialFailure(step=key, cause=RuntimeError("Image storage is not configured.")))
                continue
            upload = self.storage.upload_image(image, folder="beneficiaries")
            if upload.success and upload.url:
                fields[logical_name] = upload.url
                uploaded.append(upload.url)
            else:
                warnings.append(PartialFailure(step=key, cause=RuntimeError(upload.error or "Upload failed")))

        if is_empty(fields.get("location")):
            location = synthesize_location(fields)
            if location:
                fields["location"] = location
        fields.setdefault("is_active", True)
        payload = denormalize(fields, BENEFICIARY_SCHEMA)
        try:
            created = self.beneficiaries.create(payload)
        except ApiError:
            self._discard_uploads(uploaded)
            raise
        record = normalize(created or payload, BENEFICIARY_SCHEMA)
        log_action(logger, "beneficiary", "create", record.id, "success" if not warnings else "partial_failure")
        return OnboardingResult(
            record=record,
            committed=["beneficiary", *[key for key, name in BENEFICIARY_IMAGES if name in fields]],
            warnings=warnings,
        )

    def _discard_uploads(self, urls: list[str]) -> None:
        if self.storage is None:
            return
        for url in urls:
            outcome = self.storage.delete_image(url)
            if not outcome.success:
                logger.warning("could not remove orphaned upload %s: %s", url, outcome.error)
