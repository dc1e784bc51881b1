"""Government scheme catalog records and their eligibility criteria."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from src.models.enums import (
    BenefitType,
    ComparisonOperator,
    CriterionType,
    GovernmentLevel,
    OperatorFamily,
    ProfileField,
)

Scalar = str | int | float | bool
CriterionValue = Scalar | list[Scalar]

OPERATOR_FAMILIES: Final[dict[ComparisonOperator, OperatorFamily]] = {
    ComparisonOperator.EQUALS: OperatorFamily.SCALAR,
    ComparisonOperator.NOT_EQUALS: OperatorFamily.SCALAR,
    ComparisonOperator.GREATER_THAN: OperatorFamily.ORDERED,
    ComparisonOperator.LESS_THAN: OperatorFamily.ORDERED,
    ComparisonOperator.GREATER_THAN_OR_EQUALS: OperatorFamily.ORDERED,
    ComparisonOperator.LESS_THAN_OR_EQUALS: OperatorFamily.ORDERED,
    ComparisonOperator.IN: OperatorFamily.SET,
    ComparisonOperator.NOT_IN: OperatorFamily.SET,
    ComparisonOperator.BETWEEN: OperatorFamily.RANGE,
    ComparisonOperator.CONTAINS: OperatorFamily.TEXT,
}


def is_number(value: object) -> bool:
    """True for ints and floats, False for bools."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class EligibilityCriterion(BaseModel):
    """A single eligibility rule attached to a scheme.

    ``value`` must fit the operator's family: a scalar for EQUALS and
    NOT_EQUALS, a number for the ordering operators, a list for IN and
    NOT_IN, a ``[min, max]`` pair of numbers for BETWEEN and a string for
    CONTAINS.
    """

    model_config = {"frozen": True}

    id: str
    type: CriterionType
    field: ProfileField
    operator: ComparisonOperator
    value: CriterionValue
    description: str
    is_mandatory: bool = True

    @property
    def family(self) -> OperatorFamily:
        return OPERATOR_FAMILIES[self.operator]

    @model_validator(mode="after")
    def _check_value_shape(self) -> EligibilityCriterion:
        family = self.family
        value = self.value
        if family is OperatorFamily.SCALAR and isinstance(value, list):
            raise ValueError(f"{self.operator} expects a single value, got a list")
        if family is OperatorFamily.ORDERED and not is_number(value):
            raise ValueError(f"{self.operator} expects a number, got {value!r}")
        if family is OperatorFamily.SET and not isinstance(value, list):
            raise ValueError(f"{self.operator} expects a list of values, got {value!r}")
        if family is OperatorFamily.RANGE:
            if not (isinstance(value, list) and len(value) == 2 and all(is_number(v) for v in value)):
                raise ValueError(f"{self.operator} expects a [min, max] pair of numbers, got {value!r}")
            if value[0] > value[1]:
                raise ValueError(f"{self.operator} range minimum {value[0]} exceeds maximum {value[1]}")
        if family is OperatorFamily.TEXT and not isinstance(value, str):
            raise ValueError(f"{self.operator} expects a string, got {value!r}")
        return self


class BenefitDetails(BaseModel):
    type: Literal["monetary", "service", "subsidy", "other"] = "monetary"
    description: str
    amount: float | None = None
    amount_type: Literal["one_time", "monthly", "yearly", "as_needed"] | None = None
    currency: str = "INR"


class ApplicationStep(BaseModel):
    step_number: int
    title: str
    description: str
    required_documents: list[str] = Field(default_factory=list)
    estimated_time: str = ""
    online_available: bool = False
    online_url: str | None = None
    offline_location: str | None = None
    helpline_number: str | None = None
    tips: list[str] = Field(default_factory=list)


class RequiredDocument(BaseModel):
    name: str
    description: str = ""
    is_mandatory: bool = True
    alternative_documents: list[str] = Field(default_factory=list)


class ContactInformation(BaseModel):
    department: str = ""
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    helpline_number: str | None = None
    website_url: str | None = None


class DataSource(BaseModel):
    name: str = ""
    url: str = ""
    last_accessed: datetime | None = None
    is_official: bool | None = None


class GovernmentScheme(BaseModel):
    """A catalog entry for one government benefit scheme.

    Catalog-completeness rules (agency, contact info, source attribution,
    application steps) are checked by
    :func:`src.validation.scheme.validate_scheme` rather than at
    construction, so partially curated records can still be loaded and
    matched.
    """

    model_config = {"populate_by_name": True}

    id: str
    name: str
    short_name: str | None = None
    description: str
    simplified_description: str | None = None
    benefit_type: BenefitType
    benefit_categories: list[BenefitType] = Field(default_factory=list)
    government_level: GovernmentLevel = GovernmentLevel.CENTRAL
    implementing_agency: str = ""
    eligibility_criteria: list[EligibilityCriterion] = Field(default_factory=list)
    target_demographics: list[str] = Field(default_factory=list)
    benefits: list[BenefitDetails] = Field(default_factory=list)
    application_process: list[ApplicationStep] = Field(default_factory=list)
    documents: list[RequiredDocument] = Field(default_factory=list)
    application_deadline: datetime | None = None
    is_open_for_application: bool = True
    contact_info: ContactInformation | None = None
    source: DataSource | None = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_verified: datetime | None = None
    is_active: bool = True
    available_languages: list[str] = Field(default_factory=lambda: ["en"])

    @field_validator("last_updated", "last_verified", "application_deadline")
    @classmethod
    def _naive_as_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @model_validator(mode="after")
    def _include_primary_category(self) -> GovernmentScheme:
        if self.benefit_type not in self.benefit_categories:
            self.benefit_categories = [self.benefit_type, *self.benefit_categories]
        return self
