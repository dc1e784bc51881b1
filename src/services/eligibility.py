"""Eligibility matching engine for household-level scheme discovery.

For a household profile the engine evaluates every active, open scheme
against the primary applicant and against each family member, so one
call surfaces schemes that any member of the household qualifies for.

Architecture:
    * :func:`~src.services.field_resolver.resolve_field` extracts the value
      a criterion refers to, for the applicant or a specific member.
    * :func:`~src.services.criteria.evaluate_criterion` decides one rule.
    * :meth:`MatchingEngine.evaluate_for_subject` buckets criteria into
      matched / missing / partial and computes a 0-100 score where
      mandatory criteria carry 70 points and optional criteria 30.
    * Results are ranked by priority then score, grouped by benefit
      category and summarised per family member.

The engine holds no state; construct one wherever it is needed.  Inputs
are never mutated, every operation returns new objects.

Complexity: O(s * (1 + m) * c) for s schemes, m family members and c
criteria per scheme.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from typing import Final

import structlog

from config.settings import settings
from src.models.enums import ApplicableTo, BenefitType, Priority
from src.models.matching import (
    CategorizedMatchResults,
    FamilyMemberMatchSummary,
    MatchExplanation,
    MatchingSummary,
    MatchResult,
)
from src.models.scheme import EligibilityCriterion, GovernmentScheme
from src.models.user_profile import FamilyMember, UserProfile
from src.services.criteria import evaluate_criterion
from src.services.explanation import explain_match
from src.services.field_resolver import resolve_field

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------

_MANDATORY_WEIGHT: Final[float] = 70.0
_OPTIONAL_WEIGHT: Final[float] = 30.0
_HIGH_PRIORITY_MIN_SCORE: Final[float] = 80.0
_LOW_PRIORITY_BELOW_SCORE: Final[float] = 50.0
_PARTIAL_ELIGIBILITY_ABOVE_SCORE: Final[float] = 50.0

_PRIORITY_ORDER: Final[dict[Priority, int]] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}

BENEFIT_TYPE_NAMES: Final[dict[BenefitType, str]] = {
    BenefitType.SCHOLARSHIP: "Scholarships",
    BenefitType.HEALTHCARE: "Healthcare",
    BenefitType.FINANCIAL_AID: "Financial Aid",
    BenefitType.EDUCATION: "Education",
    BenefitType.EMPLOYMENT: "Employment",
    BenefitType.HOUSING: "Housing",
    BenefitType.AGRICULTURE: "Agriculture",
    BenefitType.SOCIAL_SECURITY: "Social Security",
    BenefitType.DISABILITY: "Disability Support",
    BenefitType.WOMEN_WELFARE: "Women Welfare",
    BenefitType.CHILD_WELFARE: "Child Welfare",
    BenefitType.SENIOR_CITIZEN: "Senior Citizen",
}


# ---------------------------------------------------------------------------
# Module-level scoring helpers
# ---------------------------------------------------------------------------


def compute_score(
    criteria: Sequence[EligibilityCriterion],
    matched: Sequence[EligibilityCriterion],
) -> float:
    """Score a subject against a scheme's criteria.

    Any failed mandatory criterion scores 0.  Otherwise mandatory criteria
    contribute up to 70 points and optional criteria up to 30; a scheme
    with no optional criteria gets the full 30, and one with no criteria
    at all scores 100.
    """
    total = len(criteria)
    mandatory = sum(1 for c in criteria if c.is_mandatory)
    matched_mandatory = sum(1 for c in matched if c.is_mandatory)

    if mandatory and matched_mandatory != mandatory:
        return 0.0

    mandatory_score = (matched_mandatory / mandatory) * _MANDATORY_WEIGHT if mandatory else _MANDATORY_WEIGHT
    optional_total = total - mandatory
    if optional_total > 0:
        optional_score = ((len(matched) - matched_mandatory) / optional_total) * _OPTIONAL_WEIGHT
    else:
        optional_score = _OPTIONAL_WEIGHT
    return mandatory_score + optional_score


def priority_for(score: float, *, is_fully_eligible: bool) -> Priority:
    if is_fully_eligible and score >= _HIGH_PRIORITY_MIN_SCORE:
        return Priority.HIGH
    if score < _LOW_PRIORITY_BELOW_SCORE:
        return Priority.LOW
    return Priority.MEDIUM


# ---------------------------------------------------------------------------
# Matching Engine
# ---------------------------------------------------------------------------


class MatchingEngine:
    """Matches household profiles against a scheme catalog snapshot.

    Example: a farmer (35) with a spouse and a 65-year-old parent matched
    against PM-KISAN and an old-age pension yields one INDIVIDUAL result
    for PM-KISAN and one SPECIFIC_MEMBER result for the parent's pension.
    """

    __slots__ = ("_top_schemes_per_member",)

    def __init__(self, *, top_schemes_per_member: int | None = None) -> None:
        self._top_schemes_per_member = (
            top_schemes_per_member
            if top_schemes_per_member is not None
            else settings.top_schemes_per_member
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_matches(
        self,
        profile: UserProfile,
        schemes: Iterable[GovernmentScheme],
    ) -> list[MatchResult]:
        """Find every scheme the applicant or a household member qualifies for.

        Inactive schemes and schemes closed for applications are skipped.
        A scheme can appear once for the applicant and once per eligible
        member, never twice for the same member.

        Returns
        -------
        list[MatchResult]
            Ranked by :meth:`rank_matches`.
        """
        results: list[MatchResult] = []
        seen_member_pairs: set[tuple[str, str]] = set()
        evaluated = 0
        skipped = 0

        for scheme in schemes:
            if not (scheme.is_active and scheme.is_open_for_application):
                skipped += 1
                continue
            evaluated += 1

            primary = self.evaluate_for_subject(scheme, profile)
            if primary.eligibility_score > 0:
                results.append(primary)

            for member in profile.household_members:
                member_result = self.evaluate_for_subject(scheme, profile, member)
                if member_result.eligibility_score <= 0:
                    continue
                pair = (scheme.id, member.id)
                if pair in seen_member_pairs:
                    continue
                seen_member_pairs.add(pair)
                results.append(member_result)

        logger.info(
            "matching.find_matches_complete",
            profile_id=profile.id,
            schemes_evaluated=evaluated,
            schemes_skipped=skipped,
            household_members=len(profile.household_members),
            matches=len(results),
        )
        return self.rank_matches(results)

    def evaluate_for_subject(
        self,
        scheme: GovernmentScheme,
        profile: UserProfile,
        member: FamilyMember | None = None,
    ) -> MatchResult:
        """Evaluate ``scheme`` for the applicant, or for ``member`` when given."""
        matched: list[EligibilityCriterion] = []
        missing: list[EligibilityCriterion] = []
        partial: list[EligibilityCriterion] = []

        for criterion in scheme.eligibility_criteria:
            value = resolve_field(profile, criterion.field, member)
            if evaluate_criterion(criterion, value):
                matched.append(criterion)
            elif criterion.is_mandatory:
                missing.append(criterion)
            else:
                partial.append(criterion)

        score = compute_score(scheme.eligibility_criteria, matched)
        is_fully_eligible = not missing

        if member is None:
            applicable_to = ApplicableTo.INDIVIDUAL
            applicable_members: list[FamilyMember] = []
            member_id = None
        else:
            applicable_to = ApplicableTo.SPECIFIC_MEMBER
            applicable_members = [member]
            member_id = member.id

        return MatchResult(
            scheme=scheme,
            eligibility_score=score,
            is_fully_eligible=is_fully_eligible,
            applicable_members=applicable_members,
            applicable_to=applicable_to,
            specific_member_id=member_id,
            matched_criteria=matched,
            missing_criteria=missing,
            partial_match_criteria=partial,
            priority=priority_for(score, is_fully_eligible=is_fully_eligible),
        )

    @staticmethod
    def rank_matches(matches: Iterable[MatchResult]) -> list[MatchResult]:
        """Stable sort: priority (high first), then score descending."""
        return sorted(
            matches,
            key=lambda m: (_PRIORITY_ORDER[m.priority], -m.eligibility_score),
        )

    def categorize_matches(self, matches: Sequence[MatchResult]) -> list[CategorizedMatchResults]:
        """Group matches by the scheme's primary benefit type.

        Groups are ordered by size (largest first); equal-sized groups keep
        the order in which their category was first seen.
        """
        groups: dict[BenefitType, list[MatchResult]] = {}
        for match in matches:
            groups.setdefault(match.scheme.benefit_type, []).append(match)

        categorized = [
            CategorizedMatchResults(
                category=category,
                category_name=BENEFIT_TYPE_NAMES.get(category, str(category)),
                results=self.rank_matches(group),
                total_count=len(group),
            )
            for category, group in groups.items()
        ]
        categorized.sort(key=lambda c: c.total_count, reverse=True)
        return categorized

    def explain_match(self, match: MatchResult, profile: UserProfile) -> MatchExplanation:
        return explain_match(match, profile)

    def get_summary(self, matches: Sequence[MatchResult], profile: UserProfile) -> MatchingSummary:
        """Summarise a ranked result set, including per-member breakdowns."""
        fully_eligible = sum(1 for m in matches if m.is_fully_eligible)
        partially_eligible = sum(
            1
            for m in matches
            if not m.is_fully_eligible and m.eligibility_score > _PARTIAL_ELIGIBILITY_ABOVE_SCORE
        )

        by_member: dict[str, list[MatchResult]] = {}
        for match in matches:
            if match.specific_member_id is not None:
                by_member.setdefault(match.specific_member_id, []).append(match)

        member_summaries: list[FamilyMemberMatchSummary] = []
        for member_id, member_matches in by_member.items():
            member = profile.get_member(member_id)
            if member is None:
                logger.warning("matching.summary_unknown_member", member_id=member_id)
                continue
            member_summaries.append(
                FamilyMemberMatchSummary(
                    member=member,
                    match_count=len(member_matches),
                    top_schemes=self.rank_matches(member_matches)[: self._top_schemes_per_member],
                )
            )

        return MatchingSummary(
            total_schemes_analyzed=len(matches),
            total_matches=len(matches),
            fully_eligible_count=fully_eligible,
            partially_eligible_count=partially_eligible,
            categorized_results=self.categorize_matches(matches),
            family_member_matches=member_summaries,
            generated_at=datetime.now(UTC),
        )
