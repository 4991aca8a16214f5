from __future__ import annotations

from dataclasses import dataclass

from .clients import BeneficiariesClient, DiscountsClient, ResourceClient, StorageClient, VendorsClient
from .config import ClientConfig, load_config
from .http_client import HttpClient
from .logger import configure_level
from .reconciler import SCHEMAS, EntitySchema


@dataclass
class AdminSession:
    config: ClientConfig
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        if self.http is None:
            self.http = HttpClient(self.config)

    @classmethod
    def from_env(cls, env_file: str | None = None) -> AdminSession:
        config = load_config(env_file)
        configure_level(config.log_level)
        return cls(config)

    def vendors(self) -> VendorsClient:
        return VendorsClient(self._http)

    def discounts(self) -> DiscountsClient:
        return DiscountsClient(self._http)

    def beneficiaries(self) -> BeneficiariesClient:
        return BeneficiariesClient(self._http)

    def storage(self) -> StorageClient:
        return StorageClient(self._http, self.config.storage_url, self.config.storage_bucket)

    def resource(self, entity: str) -> tuple[ResourceClient, EntitySchema]:
        factories = {
            "vendors": self.vendors,
            "discounts": self.discounts,
            "beneficiaries": self.beneficiaries,
        }
        if entity not in factories:
            raise ValueError(f"Unknown entity {entity!r}; expected one of {', '.join(factories)}")
        return factories[entity](), SCHEMAS[entity]

    @property
    def _http(self) -> HttpClient:
        if self.http is None:
            raise RuntimeError("HTTP client not initialized")
        return self.http
