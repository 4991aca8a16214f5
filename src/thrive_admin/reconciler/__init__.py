from .engine import (
    coerce_field,
    denormalize,
    format_date,
    is_empty,
    is_soft_deleted,
    mask_account,
    normalize,
    normalize_many,
    resolve_fields,
    strip_denied,
    synthesize_location,
    validate_required,
)
from .field_spec import NOT_PROVIDED, EntitySchema, FieldKind, FieldSpec
from .schemas import BENEFICIARY_SCHEMA, DISCOUNT_SCHEMA, SCHEMAS, VENDOR_SCHEMA

__all__ = [
    "BENEFICIARY_SCHEMA",
    "DISCOUNT_SCHEMA",
    "EntitySchema",
    "FieldKind",
    "FieldSpec",
    "NOT_PROVIDED",
    "SCHEMAS",
    "VENDOR_SCHEMA",
    "coerce_field",
    "denormalize",
    "format_date",
    "is_empty",
    "is_soft_deleted",
    "mask_account",
    "normalize",
    "normalize_many",
    "resolve_fields",
    "strip_denied",
    "synthesize_location",
    "validate_required",
]
