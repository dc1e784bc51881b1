"""Result models produced by the matching engine."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

from src.models.enums import ApplicableTo, BenefitType, Priority
from src.models.scheme import EligibilityCriterion, GovernmentScheme
from src.models.user_profile import FamilyMember


class MatchResult(BaseModel):
    """Outcome of evaluating one scheme against one subject.

    The subject is the primary profile (``applicable_to`` INDIVIDUAL) or a
    single household member (SPECIFIC_MEMBER, with ``specific_member_id``).
    """

    model_config = {"frozen": True}

    scheme: GovernmentScheme
    eligibility_score: float = Field(ge=0.0, le=100.0)
    is_fully_eligible: bool
    applicable_members: list[FamilyMember] = Field(default_factory=list)
    applicable_to: ApplicableTo = ApplicableTo.INDIVIDUAL
    specific_member_id: str | None = None
    matched_criteria: list[EligibilityCriterion] = Field(default_factory=list)
    missing_criteria: list[EligibilityCriterion] = Field(default_factory=list)
    partial_match_criteria: list[EligibilityCriterion] = Field(default_factory=list)
    priority: Priority = Priority.MEDIUM

    @model_validator(mode="after")
    def _member_id_iff_specific(self) -> MatchResult:
        is_specific = self.applicable_to == ApplicableTo.SPECIFIC_MEMBER
        if is_specific != (self.specific_member_id is not None):
            raise ValueError("specific_member_id must be set exactly when applicable_to is specific_member")
        return self


class CriterionMatchExplanation(BaseModel):
    criterion: EligibilityCriterion
    is_matched: bool
    user_value: Any = None
    explanation: str


class MatchExplanation(BaseModel):
    overall_score: float
    matched_criteria: list[CriterionMatchExplanation] = Field(default_factory=list)
    unmatched_criteria: list[CriterionMatchExplanation] = Field(default_factory=list)
    summary: str
    personalized_explanation: str


class CategorizedMatchResults(BaseModel):
    category: BenefitType
    category_name: str
    results: list[MatchResult] = Field(default_factory=list)
    total_count: int = 0


class FamilyMemberMatchSummary(BaseModel):
    member: FamilyMember
    match_count: int
    top_schemes: list[MatchResult] = Field(default_factory=list)


class MatchingSummary(BaseModel):
    """Aggregate view over one ranked result set."""

    total_schemes_analyzed: int = 0
    total_matches: int = 0
    fully_eligible_count: int = 0
    partially_eligible_count: int = 0
    categorized_results: list[CategorizedMatchResults] = Field(default_factory=list)
    family_member_matches: list[FamilyMemberMatchSummary] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
