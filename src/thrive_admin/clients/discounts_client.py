from __future__ import annotations

from dataclasses import dataclass

from .base import ResourceClient


@dataclass
class DiscountsClient(ResourceClient):
    resource = "discounts"
    collection_keys = ("discounts",)
    record_keys = ("discount",)
