from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..exceptions import NotReadyError
from .base import ResourceClient

BENEFICIARY_SCAN_LIMIT = 1000


@dataclass
class BeneficiariesClient(ResourceClient):
    resource = "beneficiaries"
    collection_keys = ("beneficiaries", "charities")
    record_keys = ("beneficiary", "charity")

    def get(
        self,
        record_id: str,
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> dict[str, Any]:
        try:
            return super().get(record_id, context_key=context_key, context_version=context_version)
        except NotReadyError:
            # No single-record endpoint yet; find the row in a large page.
            page = self.list_page(
                1,
                BENEFICIARY_SCAN_LIMIT,
                context_key=context_key,
                context_version=context_version,
            )
            for row in page.rows:
                if str(row.get("id")) == str(record_id):
                    return row
            raise
