from src.validation.profile import (
    ProfileValidationResult,
    ValidationIssue,
    is_family_profile_complete,
    validate_age,
    validate_family_member,
    validate_location,
    validate_profile,
)
from src.validation.scheme import (
    SchemeValidationResult,
    get_stale_schemes,
    has_complete_source_attribution,
    is_scheme_stale,
    validate_application_step,
    validate_criterion,
    validate_data_source,
    validate_document,
    validate_scheme,
)

__all__ = [
    "ProfileValidationResult",
    "SchemeValidationResult",
    "ValidationIssue",
    "get_stale_schemes",
    "has_complete_source_attribution",
    "is_family_profile_complete",
    "is_scheme_stale",
    "validate_age",
    "validate_application_step",
    "validate_criterion",
    "validate_data_source",
    "validate_document",
    "validate_family_member",
    "validate_location",
    "validate_profile",
    "validate_scheme",
]
