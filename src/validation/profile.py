"""Completeness and consistency checks for profiles under collection.

These functions work on raw, possibly partial profile payloads (plain
dicts as posted by the profile form) and report problems as data instead
of raising, so a form can show every issue at once.  Values of the wrong
type are reported, never compared.

Once the form-level checks pass, :func:`validate_profile` also runs the
payload through :class:`~src.models.user_profile.UserProfile` and reports
any schema errors (unknown enum values, bad nested records), so a payload
it accepts always builds a valid profile.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from pydantic import BaseModel, Field, ValidationError

from src.models.scheme import is_number
from src.models.user_profile import UserProfile, age_group_for

_REQUIRED_PROFILE_FIELDS: Final[tuple[str, ...]] = (
    "age",
    "gender",
    "occupation",
    "income_range",
    "education_level",
    "caste_category",
    "marital_status",
    "location",
    "preferred_language",
)

_REQUIRED_MEMBER_FIELDS: Final[tuple[str, ...]] = ("id", "relationship", "age", "gender")

_PINCODE_RE: Final[re.Pattern[str]] = re.compile(r"^[1-9][0-9]{5}$")
_MAX_PLAUSIBLE_AGE: Final[int] = 120
_EDUCATION_REQUIRED_FROM_AGE: Final[int] = 6


class ValidationIssue(BaseModel):
    field: str
    message: str
    code: str


class ProfileValidationResult(BaseModel):
    is_valid: bool
    missing_fields: list[str] = Field(default_factory=list)
    errors: list[ValidationIssue] = Field(default_factory=list)


def _is_whole_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_age(age: Any) -> ValidationIssue | None:
    if not _is_whole_number(age):
        return ValidationIssue(field="age", message="Age must be a whole number", code="INVALID_AGE_TYPE")
    if age < 0:
        return ValidationIssue(field="age", message="Age cannot be negative", code="INVALID_AGE_NEGATIVE")
    if age > _MAX_PLAUSIBLE_AGE:
        return ValidationIssue(
            field="age",
            message="Age seems unrealistic. Please verify.",
            code="INVALID_AGE_TOO_HIGH",
        )
    return None


def _check_disability_percentage(data: Mapping[str, Any], field: str) -> ValidationIssue | None:
    percentage = data.get("disability_percentage")
    if not data.get("is_disabled") or percentage is None:
        return None
    if not is_number(percentage) or percentage < 0 or percentage > 100:
        return ValidationIssue(
            field=field,
            message="Disability percentage must be between 0 and 100",
            code="INVALID_DISABILITY_PERCENTAGE",
        )
    return None


def validate_family_member(member: Any) -> list[ValidationIssue]:
    if not isinstance(member, Mapping):
        return [
            ValidationIssue(
                field="family_member",
                message="Family member must be an object",
                code="INVALID_FAMILY_MEMBER",
            )
        ]

    errors: list[ValidationIssue] = []

    for field in _REQUIRED_MEMBER_FIELDS:
        if member.get(field) is None:
            errors.append(
                ValidationIssue(
                    field=f"family_member.{field}",
                    message=f"Family member {field} is required",
                    code=f"MISSING_FAMILY_MEMBER_{field.upper()}",
                )
            )

    age = member.get("age")
    if age is not None:
        age_issue = validate_age(age)
        if age_issue:
            errors.append(age_issue.model_copy(update={"field": f"family_member.{age_issue.field}"}))

    disability_issue = _check_disability_percentage(member, "family_member.disability_percentage")
    if disability_issue:
        errors.append(disability_issue)

    return errors


def validate_location(location: Any) -> list[ValidationIssue]:
    if not location:
        return [ValidationIssue(field="location", message="Location is required", code="MISSING_LOCATION")]
    if not isinstance(location, Mapping):
        return [ValidationIssue(field="location", message="Location must be an object", code="INVALID_LOCATION")]

    errors: list[ValidationIssue] = []
    required = (
        ("state", "State is required", "MISSING_STATE"),
        ("district", "District is required", "MISSING_DISTRICT"),
        ("residence_type", "Residence type is required", "MISSING_RESIDENCE_TYPE"),
    )
    for key, message, code in required:
        if not location.get(key):
            errors.append(ValidationIssue(field=f"location.{key}", message=message, code=code))

    pincode = location.get("pincode")
    if pincode and not _PINCODE_RE.match(str(pincode)):
        errors.append(
            ValidationIssue(field="location.pincode", message="Invalid pincode format", code="INVALID_PINCODE")
        )
    return errors


def _validate_members(members: Any) -> list[ValidationIssue]:
    if not isinstance(members, list | tuple):
        return [
            ValidationIssue(
                field="family_members",
                message="Family members must be a list",
                code="INVALID_FAMILY_MEMBERS",
            )
        ]

    errors: list[ValidationIssue] = []
    for index, member in enumerate(members):
        for issue in validate_family_member(member):
            suffix = issue.field.removeprefix("family_member").removeprefix(".")
            field = f"family_members[{index}].{suffix}" if suffix else f"family_members[{index}]"
            errors.append(issue.model_copy(update={"field": field}))

    ids = [m.get("id") for m in members if isinstance(m, Mapping) and m.get("id") is not None]
    seen: set[Any] = set()
    for member_id in ids:
        if member_id in seen:
            errors.append(
                ValidationIssue(
                    field="family_members",
                    message=f"Family member id {member_id!r} is used more than once",
                    code="DUPLICATE_FAMILY_MEMBER_ID",
                )
            )
        seen.add(member_id)
    return errors


def _field_path(loc: tuple[int | str, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "profile"


def _schema_issues(profile: Mapping[str, Any]) -> list[ValidationIssue]:
    try:
        UserProfile.model_validate(dict(profile))
    except ValidationError as exc:
        return [
            ValidationIssue(field=_field_path(error["loc"]), message=error["msg"], code=error["type"].upper())
            for error in exc.errors()
        ]
    return []


def validate_profile(profile: Mapping[str, Any]) -> ProfileValidationResult:
    """Validate a complete or partial profile payload."""
    errors: list[ValidationIssue] = []
    missing_fields = [f for f in _REQUIRED_PROFILE_FIELDS if profile.get(f) is None]

    age = profile.get("age")
    age_issue = validate_age(age) if age is not None else None
    if age_issue:
        errors.append(age_issue)

    age_group = profile.get("age_group")
    if age is not None and age_issue is None and age_group is not None:
        expected = age_group_for(age)
        if age_group != expected:
            errors.append(
                ValidationIssue(
                    field="age_group",
                    message=f"Age group should be {expected} for age {age}",
                    code="AGE_GROUP_MISMATCH",
                )
            )

    errors.extend(validate_location(profile.get("location")))

    members = profile.get("family_members")
    if members is not None:
        errors.extend(_validate_members(members))

    family_size = profile.get("family_size")
    if family_size is not None and isinstance(members, list | tuple):
        if not _is_whole_number(family_size):
            errors.append(
                ValidationIssue(
                    field="family_size",
                    message="Family size must be a whole number",
                    code="INVALID_FAMILY_SIZE",
                )
            )
        elif family_size < len(members):
            errors.append(
                ValidationIssue(
                    field="family_size",
                    message="Family size cannot be less than number of family members",
                    code="FAMILY_SIZE_MISMATCH",
                )
            )

    disability_issue = _check_disability_percentage(profile, "disability_percentage")
    if disability_issue:
        errors.append(disability_issue)

    # Schema checks run only on a payload that passed the form-level checks.
    if not missing_fields and not errors:
        errors.extend(_schema_issues(profile))

    return ProfileValidationResult(
        is_valid=not missing_fields and not errors,
        missing_fields=missing_fields,
        errors=errors,
    )


def is_family_profile_complete(profile: Mapping[str, Any]) -> bool:
    """Every member has age, gender and relationship, plus education from age 6."""
    members = profile.get("family_members") or []
    if not isinstance(members, list | tuple):
        return False
    for member in members:
        if not isinstance(member, Mapping):
            return False
        if any(member.get(key) is None for key in ("age", "gender", "relationship")):
            return False
        if not _is_whole_number(member["age"]):
            return False
        if member["age"] >= _EDUCATION_REQUIRED_FROM_AGE and member.get("education_level") is None:
            return False
    return True
