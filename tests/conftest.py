"""Shared fixtures: household profiles and scheme/criterion builders."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from src.models.enums import (
    BenefitType,
    ComparisonOperator,
    CriterionType,
    ProfileField,
)
from src.models.scheme import (
    ApplicationStep,
    BenefitDetails,
    ContactInformation,
    DataSource,
    EligibilityCriterion,
    GovernmentScheme,
)
from src.models.user_profile import FamilyMember, LocationInfo, UserProfile

CriterionFactory = Callable[..., EligibilityCriterion]
SchemeFactory = Callable[..., GovernmentScheme]


@pytest.fixture
def make_criterion() -> CriterionFactory:
    counter = iter(range(1, 10_000))

    def _make(
        field: ProfileField | str,
        operator: ComparisonOperator,
        value: Any,
        *,
        mandatory: bool = True,
        type: CriterionType = CriterionType.OCCUPATION,
        description: str | None = None,
    ) -> EligibilityCriterion:
        n = next(counter)
        return EligibilityCriterion(
            id=f"crit-{n}",
            type=type,
            field=field,
            operator=operator,
            value=value,
            description=description or f"{field} {operator} {value}",
            is_mandatory=mandatory,
        )

    return _make


@pytest.fixture
def make_scheme() -> SchemeFactory:
    def _make(
        scheme_id: str,
        criteria: list[EligibilityCriterion] | None = None,
        *,
        benefit_type: BenefitType = BenefitType.FINANCIAL_AID,
        **overrides: Any,
    ) -> GovernmentScheme:
        fields: dict[str, Any] = {
            "id": scheme_id,
            "name": f"Scheme {scheme_id}",
            "description": f"Test scheme {scheme_id} used by the matching tests.",
            "benefit_type": benefit_type,
            "implementing_agency": "Ministry of Testing",
            "eligibility_criteria": criteria or [],
            "benefits": [BenefitDetails(description="Cash support", amount=5000)],
            "application_process": [
                ApplicationStep(
                    step_number=1,
                    title="Apply",
                    description="Apply at the nearest CSC",
                    estimated_time="30 minutes",
                )
            ],
            "contact_info": ContactInformation(department="Testing", website_url="https://example.gov.in/"),
            "source": DataSource(
                name="Official portal",
                url="https://example.gov.in/",
                last_accessed=datetime.now(UTC),
                is_official=True,
            ),
        }
        fields.update(overrides)
        return GovernmentScheme(**fields)

    return _make


@pytest.fixture
def farmer_profile() -> UserProfile:
    """35-year-old farmer with no household members listed."""
    return UserProfile(
        id="farmer-1",
        age=35,
        gender="male",
        occupation="farmer",
        education_level="secondary",
        marital_status="married",
        income_range="low",
        annual_income=200000.0,
        caste_category="obc",
        location=LocationInfo(state="Maharashtra", district="Nashik", pincode="422001", residence_type="rural"),
    )


@pytest.fixture
def household_profile() -> UserProfile:
    """BPL farming household: applicant (also listed as SELF), wife, son, mother.

    - Applicant: 35, male, farmer
    - Spouse: 32, female, homemaker
    - Child: 17, male, student (higher secondary)
    - Parent: 65, female, no occupation recorded
    """
    return UserProfile(
        id="household-1",
        age=35,
        gender="male",
        occupation="farmer",
        education_level="secondary",
        marital_status="married",
        income_range="bpl",
        annual_income=90000.0,
        caste_category="obc",
        location=LocationInfo(state="Maharashtra", district="Nashik", residence_type="rural"),
        family_members=[
            FamilyMember(id="m-self", relationship="self", age=35, gender="male", occupation="farmer"),
            FamilyMember(id="m-spouse", relationship="spouse", age=32, gender="female", occupation="homemaker"),
            FamilyMember(
                id="m-child",
                relationship="child",
                age=17,
                gender="male",
                occupation="student",
                education_level="higher_secondary",
            ),
            FamilyMember(id="m-parent", relationship="parent", age=65, gender="female"),
        ],
    )
