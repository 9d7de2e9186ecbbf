# Services package
from vps_catalog.services.collection_service import CollectionLoader, summarize_providers
from vps_catalog.services.validation_service import FieldError, ValidationErrorSet, validate_plan

__all__ = [
    "CollectionLoader",
    "summarize_providers",
    "FieldError",
    "ValidationErrorSet",
    "validate_plan",
]
