"""Plain-language explanations for match results.

Turns a :class:`~src.models.matching.MatchResult` into per-criterion
sentences, a one-line requirement count and a short personalised
narrative suitable for showing next to a scheme card.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Final

from src.models.enums import ApplicableTo, CriterionType
from src.models.matching import CriterionMatchExplanation, MatchExplanation, MatchResult
from src.models.scheme import BenefitDetails, EligibilityCriterion
from src.models.user_profile import LocationInfo, UserProfile
from src.services.field_resolver import resolve_field

_MATCHED_TEMPLATES: Final[dict[CriterionType, str]] = {
    CriterionType.AGE_RANGE: "Your age ({value}) meets the requirement.",
    CriterionType.INCOME_LIMIT: "Your income level qualifies for this scheme.",
    CriterionType.OCCUPATION: "Your occupation as {value} qualifies you.",
    CriterionType.EDUCATION_LEVEL: "Your education level meets the requirement.",
    CriterionType.CASTE_CATEGORY: "You belong to an eligible category.",
}

_UNMATCHED_TEMPLATES: Final[dict[CriterionType, str]] = {
    CriterionType.AGE_RANGE: "Age requirement not met. Required: {description}, Your age: {value}.",
    CriterionType.INCOME_LIMIT: "Income requirement not met. {description}.",
    CriterionType.OCCUPATION: "Occupation requirement not met. Required: {description}.",
    CriterionType.EDUCATION_LEVEL: "Education requirement not met. Required: {description}.",
    CriterionType.CASTE_CATEGORY: "Category requirement not met. Required: {description}.",
}

_MATCHED_FALLBACK: Final[str] = "Requirement met: {description}"
_UNMATCHED_FALLBACK: Final[str] = "Requirement not met: {description}"


def describe_value(value: Any) -> str:
    """Render a resolved profile value for display."""
    if value is None:
        return "not provided"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, Enum):
        return str(value.value).replace("_", " ")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, LocationInfo):
        return f"{value.district}, {value.state}"
    if isinstance(value, list | tuple):
        return ", ".join(describe_value(v) for v in value)
    return str(value)


def explain_criterion(criterion: EligibilityCriterion, user_value: Any, *, is_matched: bool) -> str:
    templates = _MATCHED_TEMPLATES if is_matched else _UNMATCHED_TEMPLATES
    fallback = _MATCHED_FALLBACK if is_matched else _UNMATCHED_FALLBACK
    template = templates.get(criterion.type, fallback)
    return template.format(value=describe_value(user_value), description=criterion.description)


def _format_amount(amount: float) -> str:
    if amount.is_integer():
        return f"{amount:,.0f}"
    return f"{amount:,}"


def _format_benefit(benefit: BenefitDetails) -> str:
    if benefit.amount:
        return f"This scheme provides {benefit.description} of ₹{_format_amount(benefit.amount)}."
    return f"This scheme provides: {benefit.description}."


def personalized_explanation(match: MatchResult, profile: UserProfile) -> str:
    scheme = match.scheme
    parts: list[str] = []

    if match.is_fully_eligible:
        parts.append(
            f"Great news! As a {describe_value(profile.occupation)} from "
            f"{profile.location.state}, you are fully eligible for {scheme.name}."
        )
    else:
        parts.append(f"Based on your profile, you may be eligible for {scheme.name}.")

    if scheme.benefits:
        parts.append(_format_benefit(scheme.benefits[0]))

    if match.applicable_to == ApplicableTo.SPECIFIC_MEMBER and match.applicable_members:
        relationship = describe_value(match.applicable_members[0].relationship)
        parts.append(f"This scheme specifically applies to your family member ({relationship}).")

    return " ".join(parts)


def explain_match(match: MatchResult, profile: UserProfile) -> MatchExplanation:
    """Build the full explanation for ``match`` from the subject's point of view.

    Member-targeted matches resolve values against that member; if the
    member is no longer on the profile the household values are used.
    """
    member = profile.get_member(match.specific_member_id) if match.specific_member_id else None

    def _explain(criterion: EligibilityCriterion, is_matched: bool) -> CriterionMatchExplanation:
        user_value = resolve_field(profile, criterion.field, member)
        return CriterionMatchExplanation(
            criterion=criterion,
            is_matched=is_matched,
            user_value=user_value,
            explanation=explain_criterion(criterion, user_value, is_matched=is_matched),
        )

    matched = [_explain(c, True) for c in match.matched_criteria]
    unmatched = [_explain(c, False) for c in match.missing_criteria]

    if match.is_fully_eligible:
        summary = f"You meet all requirements for {match.scheme.name}!"
    else:
        total = len(match.matched_criteria) + len(match.missing_criteria)
        summary = f"You meet {len(match.matched_criteria)} of {total} requirements."

    return MatchExplanation(
        overall_score=match.eligibility_score,
        matched_criteria=matched,
        unmatched_criteria=unmatched,
        summary=summary,
        personalized_explanation=personalized_explanation(match, profile),
    )
