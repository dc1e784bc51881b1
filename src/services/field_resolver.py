"""Resolve the profile value an eligibility criterion refers to.

Each :class:`~src.models.enums.ProfileField` maps to an accessor taking
the household profile and, optionally, the family member being evaluated.
Personal fields read the member first; household fields (income band,
caste, location, family size) always come from the profile.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

from src.models.enums import ProfileField
from src.models.user_profile import FamilyMember, UserProfile, age_group_for

Accessor = Callable[[UserProfile, FamilyMember | None], Any]


def _age_group(profile: UserProfile, member: FamilyMember | None) -> Any:
    if member is not None:
        return age_group_for(member.age)
    return profile.age_group


_ACCESSORS: Final[dict[ProfileField, Accessor]] = {
    # Personal: the member's own value, never the applicant's
    ProfileField.AGE: lambda p, m: m.age if m is not None else p.age,
    ProfileField.GENDER: lambda p, m: m.gender if m is not None else p.gender,
    ProfileField.IS_DISABLED: lambda p, m: m.is_disabled if m is not None else p.is_disabled,
    ProfileField.DISABILITY_PERCENTAGE: (
        lambda p, m: m.disability_percentage if m is not None else p.disability_percentage
    ),
    ProfileField.AGE_GROUP: _age_group,
    # Personal with household fallback
    ProfileField.OCCUPATION: (
        lambda p, m: m.occupation if m is not None and m.occupation is not None else p.occupation
    ),
    ProfileField.EDUCATION_LEVEL: (
        lambda p, m: (
            m.education_level if m is not None and m.education_level is not None else p.education_level
        )
    ),
    ProfileField.ANNUAL_INCOME: (
        lambda p, m: m.annual_income if m is not None and m.annual_income is not None else p.annual_income
    ),
    # Household only
    ProfileField.INCOME_RANGE: lambda p, m: p.income_range,
    ProfileField.CASTE_CATEGORY: lambda p, m: p.caste_category,
    ProfileField.MARITAL_STATUS: lambda p, m: p.marital_status,
    ProfileField.LOCATION: lambda p, m: p.location,
    ProfileField.STATE: lambda p, m: p.location.state,
    ProfileField.RESIDENCE_TYPE: lambda p, m: p.location.residence_type,
    ProfileField.FAMILY_SIZE: lambda p, m: p.family_size,
}


def resolve_field(
    profile: UserProfile,
    field_name: ProfileField | str,
    member: FamilyMember | None = None,
) -> Any:
    """Return the value of ``field_name`` for the profile or one of its members.

    Unknown field names resolve to ``None``.
    """
    try:
        key = ProfileField(field_name)
    except ValueError:
        return None
    return _ACCESSORS[key](profile, member)
