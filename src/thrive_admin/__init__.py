from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    HttpError,
    MissingRequiredField,
    NetworkError,
    NotReadyError,
    PartialFailure,
    ServerError,
    ValidationError,
)
from .http_client import HttpClient
from .models import Beneficiary, Discount, Vendor
from .reconciler import denormalize, normalize
from .session import AdminSession

__all__ = [
    "AdminSession",
    "ApiError",
    "Beneficiary",
    "ClientConfig",
    "ConfigError",
    "Discount",
    "HttpClient",
    "HttpError",
    "MissingRequiredField",
    "NetworkError",
    "NotReadyError",
    "PartialFailure",
    "ServerError",
    "ValidationError",
    "Vendor",
    "denormalize",
    "load_config",
    "normalize",
]
