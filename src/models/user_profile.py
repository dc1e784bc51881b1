"""Household profile models used as matching input.

A ``UserProfile`` describes the primary applicant plus an ordered list of
``FamilyMember`` records.  Household-level attributes (income band, caste
category, location, family size) live on the profile; personal attributes
(age, gender, occupation, education, disability) exist on both so that
schemes can be matched for each member individually.
"""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from src.models.enums import (
    AgeRange,
    CasteCategory,
    EducationLevel,
    Gender,
    IncomeLevel,
    MaritalStatus,
    OccupationType,
    RelationshipType,
    ResidenceType,
    SupportedLanguage,
)

# Upper bounds (exclusive) of each age group, checked in order.
_AGE_GROUP_BOUNDS: tuple[tuple[int, AgeRange], ...] = (
    (6, AgeRange.INFANT),
    (15, AgeRange.CHILD),
    (25, AgeRange.YOUTH),
    (45, AgeRange.ADULT),
    (60, AgeRange.MIDDLE_AGED),
)


def age_group_for(age: int) -> AgeRange:
    """Map an age in years to its :class:`AgeRange` (half-open intervals)."""
    for upper, group in _AGE_GROUP_BOUNDS:
        if age < upper:
            return group
    return AgeRange.SENIOR


class LocationInfo(BaseModel):
    state: str
    district: str
    pincode: str | None = None
    residence_type: ResidenceType


class FamilyMember(BaseModel):
    """A single household member.

    Only ``id``, ``relationship``, ``age`` and ``gender`` are required.
    Missing occupation, education and income fall back to the primary
    profile during matching.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str | None = None  # Optional for privacy
    relationship: RelationshipType
    age: int = Field(ge=0)
    gender: Gender
    occupation: OccupationType | None = None
    education_level: EducationLevel | None = None
    annual_income: float | None = None  # In INR
    special_needs: list[str] = Field(default_factory=list)
    is_disabled: bool | None = None
    disability_percentage: float | None = Field(default=None, ge=0, le=100)

    @property
    def age_group(self) -> AgeRange:
        return age_group_for(self.age)


class UserProfile(BaseModel):
    """Complete household profile for scheme matching.

    ``age_group`` and ``family_size`` are derived when omitted.  An explicit
    ``age_group`` must agree with ``age`` and ``family_size`` can never be
    smaller than the number of listed family members.
    """

    model_config = {"frozen": False}

    id: str = Field(default_factory=lambda: uuid4().hex)

    # ----------------------------------------------------------------
    # Primary applicant
    # ----------------------------------------------------------------
    age: int = Field(ge=0)
    gender: Gender
    occupation: OccupationType
    age_group: AgeRange | None = None
    education_level: EducationLevel
    marital_status: MaritalStatus
    is_disabled: bool | None = None
    disability_percentage: float | None = Field(default=None, ge=0, le=100)

    # ----------------------------------------------------------------
    # Household
    # ----------------------------------------------------------------
    income_range: IncomeLevel
    annual_income: float | None = None  # In INR
    caste_category: CasteCategory
    location: LocationInfo
    family_members: list[FamilyMember] = Field(default_factory=list)
    family_size: int | None = Field(default=None, ge=1)
    special_circumstances: list[str] = Field(default_factory=list)

    # ----------------------------------------------------------------
    # Preferences & timestamps
    # ----------------------------------------------------------------
    preferred_language: SupportedLanguage = SupportedLanguage.ENGLISH
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def _check_household(self) -> UserProfile:
        expected_group = age_group_for(self.age)
        if self.age_group is None:
            self.age_group = expected_group
        elif self.age_group != expected_group:
            raise ValueError(
                f"age_group should be {expected_group} for age {self.age}, got {self.age_group}"
            )

        member_ids = [m.id for m in self.family_members]
        if len(member_ids) != len(set(member_ids)):
            raise ValueError("family member ids must be unique within a profile")

        if self.family_size is None:
            self.family_size = len(self.family_members) + (0 if self.has_self_member else 1)
        elif self.family_size < len(self.family_members):
            raise ValueError(
                f"family_size ({self.family_size}) cannot be less than the number "
                f"of family members ({len(self.family_members)})"
            )
        return self

    @property
    def has_self_member(self) -> bool:
        return any(m.relationship == RelationshipType.SELF for m in self.family_members)

    @property
    def household_members(self) -> list[FamilyMember]:
        """Family members other than the applicant's own SELF entry."""
        return [m for m in self.family_members if m.relationship != RelationshipType.SELF]

    def get_member(self, member_id: str) -> FamilyMember | None:
        for member in self.family_members:
            if member.id == member_id:
                return member
        return None
