from .base import ResourceClient
from .beneficiaries_client import BeneficiariesClient
from .discounts_client import DiscountsClient
from .storage_client import StorageClient, UploadResult
from .vendors_client import VendorsClient

__all__ = [
    "BeneficiariesClient",
    "DiscountsClient",
    "ResourceClient",
    "StorageClient",
    "UploadResult",
    "VendorsClient",
]
