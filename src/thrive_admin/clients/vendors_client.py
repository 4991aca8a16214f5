from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..exceptions import NotReadyError
from ..logger import get_logger
from ..normalizers import normalize_listing
from ..reconciler import DISCOUNT_SCHEMA
from ..reconciler.engine import resolve_value
from .base import ResourceClient
from .discounts_client import DiscountsClient

logger = get_logger("thrive_admin.clients.vendors")

# Upper bound for the discount scan used when the nested endpoint is missing.
DISCOUNT_SCAN_LIMIT = 1000


@dataclass
class VendorsClient(ResourceClient):
    resource = "vendors"
    collection_keys = ("vendors",)
    record_keys = ("vendor",)

    def list_discounts(self, vendor_id: str) -> list[dict[str, Any]]:
        try:
            payload = self._request("GET", f"{self._record_path(vendor_id)}/discounts")
        except NotReadyError:
            logger.info("vendor discounts endpoint missing, scanning /discounts for vendor %s", vendor_id)
            return self._scan_discounts(vendor_id)
        return normalize_listing(payload, collection_keys=DiscountsClient.collection_keys).rows

    def _scan_discounts(self, vendor_id: str) -> list[dict[str, Any]]:
        page = DiscountsClient(self.http).list_page(1, DISCOUNT_SCAN_LIMIT)
        wanted = str(vendor_id)
        return [row for row in page.rows if _row_vendor_id(row) == wanted]


def _row_vendor_id(row: dict[str, Any]) -> str:
    return str(resolve_value(row, DISCOUNT_SCHEMA.spec_for("vendor_id")))
