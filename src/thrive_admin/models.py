from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DISCOUNT_TYPES = ("percentage", "fixed", "bogo", "free")
BENEFICIARY_TYPES = ("Large", "Medium", "Small")
VENDOR_CATEGORIES = ("restaurant", "retail", "service", "entertainment", "other")


class NormalizedRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str

    def to_view(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class Vendor(NormalizedRecord):
    vendor_name: str
    contact_name: str
    email: str
    contact_number: str
    website: str
    category: str
    description: str
    address: str
    city: str
    state: str
    zip_code: str
    location: str
    bank_account: str
    pricing_tier: str
    status: str
    active: bool
    enabled: bool
    logo_url: str
    work_schedule: dict[str, Any]
    customers: int | float
    revenue: int | float
    joined_on: str


class Beneficiary(NormalizedRecord):
    beneficiary_name: str
    category: str
    beneficiary_type: str
    contact_name: str
    email: str
    contact_number: str
    website: str
    ein: str
    about: str
    why_this_matters: str
    success_story: str
    story_author: str
    city: str
    state: str
    zip_code: str
    location: str
    lives_impacted: int | float
    programs_active: int | float
    direct_to_programs_percentage: int | float
    main_image_url: str
    logo_url: str
    is_active: bool
    bank_account: str
    verification_status: str
    donors: int | float
    joined_on: str


class Discount(NormalizedRecord):
    vendor_id: str
    vendor_name: str
    category: str
    title: str
    description: str
    discount_type: str
    discount_value: int | float
    pos_code: str
    usage_limit: str
    start_date: str
    end_date: str
    is_active: bool
    created_on: str

    @property
    def effective_value(self) -> int | float:
        return implied_discount_value(self.discount_type, self.discount_value)

    @property
    def preview(self) -> str:
        return discount_preview(self.discount_type, self.discount_value, self.title)


def implied_discount_value(discount_type: str, value: int | float | None) -> int | float:
    kind = (discount_type or "").strip().lower()
    if kind == "bogo":
        return 50
    if kind == "free":
        return 100
    return value or 0


def discount_preview(discount_type: str, value: int | float | None, title: str) -> str:
    kind = (discount_type or "").strip().lower()
    amount = implied_discount_value(kind, value)
    if kind == "percentage":
        return f"{amount:g}% off {title}"
    if kind == "fixed":
        return f"${amount:g} off {title}"
    if kind == "bogo":
        return f"Buy One Get One {title}"
    if kind == "free":
        return f"FREE {title}"
    return title
