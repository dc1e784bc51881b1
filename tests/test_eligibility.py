"""Tests for the household eligibility matching engine.

Covers scoring, priority assignment, per-member matching, ranking,
category grouping and the per-member summary.  The household scenarios
use the bundled sample catalog via load_schemes().
"""

from __future__ import annotations

import pytest

from src.data.seed import load_schemes
from src.models.enums import ApplicableTo, BenefitType, ComparisonOperator, Priority
from src.models.matching import MatchResult
from src.models.scheme import GovernmentScheme
from src.models.user_profile import UserProfile
from src.services.eligibility import MatchingEngine, compute_score, priority_for


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def sample_schemes() -> list[GovernmentScheme]:
    return load_schemes()


@pytest.fixture
def engine() -> MatchingEngine:
    return MatchingEngine(top_schemes_per_member=3)


def _key(match: MatchResult) -> tuple[str, str | None]:
    return (match.scheme.id, match.specific_member_id)


# ---------------------------------------------------------------------------
# Scoring helpers
# ---------------------------------------------------------------------------


class TestComputeScore:
    def test_no_criteria_scores_full(self) -> None:
        assert compute_score([], []) == 100.0

    def test_all_mandatory_matched(self, make_criterion) -> None:
        criteria = [
            make_criterion("age", ComparisonOperator.GREATER_THAN, 18),
            make_criterion("gender", ComparisonOperator.EQUALS, "female"),
        ]
        assert compute_score(criteria, criteria) == 100.0

    def test_failed_mandatory_scores_zero(self, make_criterion) -> None:
        required = make_criterion("age", ComparisonOperator.GREATER_THAN, 18)
        optional = make_criterion("gender", ComparisonOperator.EQUALS, "female", mandatory=False)
        assert compute_score([required, optional], [optional]) == 0.0

    def test_optional_share(self, make_criterion) -> None:
        required = make_criterion("age", ComparisonOperator.GREATER_THAN, 18)
        optional = [
            make_criterion("gender", ComparisonOperator.EQUALS, "female", mandatory=False),
            make_criterion("state", ComparisonOperator.CONTAINS, "pradesh", mandatory=False),
            make_criterion("family_size", ComparisonOperator.LESS_THAN, 6, mandatory=False),
        ]
        score = compute_score([required, *optional], [required, optional[0]])
        assert score == pytest.approx(80.0)

    def test_only_optional_criteria(self, make_criterion) -> None:
        optional = [
            make_criterion("gender", ComparisonOperator.EQUALS, "female", mandatory=False),
            make_criterion("family_size", ComparisonOperator.LESS_THAN, 6, mandatory=False),
        ]
        assert compute_score(optional, []) == pytest.approx(70.0)
        assert compute_score(optional, optional[:1]) == pytest.approx(85.0)


class TestPriorityFor:
    @pytest.mark.parametrize(
        ("score", "fully_eligible", "expected"),
        [
            (100.0, True, Priority.HIGH),
            (80.0, True, Priority.HIGH),
            (79.9, True, Priority.MEDIUM),
            (90.0, False, Priority.MEDIUM),
            (50.0, False, Priority.MEDIUM),
            (49.9, False, Priority.LOW),
            (0.0, False, Priority.LOW),
        ],
    )
    def test_thresholds(self, score: float, fully_eligible: bool, expected: Priority) -> None:
        assert priority_for(score, is_fully_eligible=fully_eligible) == expected


# ---------------------------------------------------------------------------
# evaluate_for_subject
# ---------------------------------------------------------------------------


class TestEvaluateForSubject:
    def test_buckets_criteria(self, engine: MatchingEngine, make_criterion, make_scheme, farmer_profile) -> None:
        occupation = make_criterion("occupation", ComparisonOperator.EQUALS, "farmer")
        caste = make_criterion("caste_category", ComparisonOperator.EQUALS, "sc", mandatory=False)
        scheme = make_scheme("s-1", [occupation, caste])

        result = engine.evaluate_for_subject(scheme, farmer_profile)

        assert result.matched_criteria == [occupation]
        assert result.missing_criteria == []
        assert result.partial_match_criteria == [caste]
        assert result.is_fully_eligible is True
        assert result.eligibility_score == pytest.approx(70.0)
        assert result.priority == Priority.MEDIUM
        assert result.applicable_to == ApplicableTo.INDIVIDUAL
        assert result.specific_member_id is None
        assert result.scheme is scheme

    def test_missing_mandatory(self, engine: MatchingEngine, make_criterion, make_scheme, farmer_profile) -> None:
        gender = make_criterion("gender", ComparisonOperator.EQUALS, "female")
        result = engine.evaluate_for_subject(make_scheme("s-1", [gender]), farmer_profile)

        assert result.missing_criteria == [gender]
        assert result.is_fully_eligible is False
        assert result.eligibility_score == 0.0
        assert result.priority == Priority.LOW

    def test_member_subject(self, engine: MatchingEngine, make_criterion, make_scheme, household_profile) -> None:
        senior = make_criterion("age", ComparisonOperator.GREATER_THAN_OR_EQUALS, 60)
        parent = household_profile.get_member("m-parent")

        result = engine.evaluate_for_subject(make_scheme("s-1", [senior]), household_profile, parent)

        assert result.applicable_to == ApplicableTo.SPECIFIC_MEMBER
        assert result.specific_member_id == "m-parent"
        assert result.applicable_members == [parent]
        assert result.eligibility_score == 100.0


# ---------------------------------------------------------------------------
# find_matches
# ---------------------------------------------------------------------------


class TestFindMatches:
    def test_farmer_individual(
        self, engine: MatchingEngine, make_criterion, make_scheme, farmer_profile: UserProfile
    ) -> None:
        kisan = make_scheme(
            "kisan",
            [
                make_criterion("occupation", ComparisonOperator.EQUALS, "farmer"),
                make_criterion("annual_income", ComparisonOperator.LESS_THAN, 1_000_000, mandatory=False),
            ],
            benefit_type=BenefitType.AGRICULTURE,
        )
        scholarship = make_scheme(
            "scholarship",
            [make_criterion("occupation", ComparisonOperator.EQUALS, "student")],
            benefit_type=BenefitType.SCHOLARSHIP,
        )

        matches = engine.find_matches(farmer_profile, [kisan, scholarship])

        assert len(matches) == 1
        match = matches[0]
        assert match.scheme.id == "kisan"
        assert match.eligibility_score == 100.0
        assert match.is_fully_eligible is True
        assert match.priority == Priority.HIGH
        assert match.applicable_to == ApplicableTo.INDIVIDUAL

    def test_family_member_match(
        self, engine: MatchingEngine, make_criterion, make_scheme, household_profile: UserProfile
    ) -> None:
        pension = make_scheme(
            "pension",
            [make_criterion("age", ComparisonOperator.GREATER_THAN_OR_EQUALS, 60)],
            benefit_type=BenefitType.SENIOR_CITIZEN,
        )

        matches = engine.find_matches(household_profile, [pension])

        assert len(matches) == 1
        assert matches[0].applicable_to == ApplicableTo.SPECIFIC_MEMBER
        assert matches[0].specific_member_id == "m-parent"
        assert matches[0].applicable_members[0].age == 65

    def test_skips_inactive_and_closed(
        self, engine: MatchingEngine, make_scheme, farmer_profile: UserProfile
    ) -> None:
        inactive = make_scheme("inactive", is_active=False)
        closed = make_scheme("closed", is_open_for_application=False)
        open_scheme = make_scheme("open")

        matches = engine.find_matches(farmer_profile, [inactive, closed, open_scheme])

        assert [m.scheme.id for m in matches] == ["open"]

    def test_empty_catalog(self, engine: MatchingEngine, household_profile: UserProfile) -> None:
        assert engine.find_matches(household_profile, []) == []

    def test_self_member_not_evaluated_twice(
        self, engine: MatchingEngine, make_scheme, household_profile: UserProfile
    ) -> None:
        matches = engine.find_matches(household_profile, [make_scheme("universal")])

        member_ids = [m.specific_member_id for m in matches]
        assert "m-self" not in member_ids
        assert member_ids.count(None) == 1
        assert len(matches) == 4

    def test_duplicate_scheme_entries(
        self, engine: MatchingEngine, make_criterion, make_scheme, household_profile: UserProfile
    ) -> None:
        scheme = make_scheme("dup", [make_criterion("income_range", ComparisonOperator.IN, ["bpl"])])

        matches = engine.find_matches(household_profile, [scheme, scheme])

        member_keys = [_key(m) for m in matches if m.specific_member_id is not None]
        assert len(member_keys) == len(set(member_keys)) == 3
        assert sum(1 for m in matches if m.specific_member_id is None) == 2

    def test_household_with_sample_catalog(
        self, engine: MatchingEngine, sample_schemes, household_profile: UserProfile
    ) -> None:
        matches = engine.find_matches(household_profile, sample_schemes)

        assert {_key(m) for m in matches} == {
            ("pm-kisan-001", None),
            ("pm-kisan-001", "m-parent"),
            ("ab-pmjay-001", None),
            ("ab-pmjay-001", "m-spouse"),
            ("ab-pmjay-001", "m-child"),
            ("ab-pmjay-001", "m-parent"),
            ("ignoaps-001", "m-parent"),
            ("pmuy-001", "m-spouse"),
            ("pmuy-001", "m-parent"),
        }
        assert all(m.eligibility_score == 100.0 for m in matches)
        assert all(m.priority == Priority.HIGH for m in matches)

    def test_results_are_valid(
        self, engine: MatchingEngine, sample_schemes, household_profile: UserProfile
    ) -> None:
        schemes_by_id = {s.id: s for s in sample_schemes}
        member_ids = {m.id for m in household_profile.household_members}

        for match in engine.find_matches(household_profile, sample_schemes):
            assert match.eligibility_score > 0
            assert match.eligibility_score >= 70 or not match.is_fully_eligible
            assert match.scheme.is_active and match.scheme.is_open_for_application
            assert match.scheme is schemes_by_id[match.scheme.id]
            criteria_ids = [
                c.id
                for c in match.matched_criteria + match.missing_criteria + match.partial_match_criteria
            ]
            assert sorted(criteria_ids) == sorted(c.id for c in match.scheme.eligibility_criteria)
            assert match.is_fully_eligible == (not match.missing_criteria)
            if match.specific_member_id is not None:
                assert match.specific_member_id in member_ids

    def test_inputs_not_mutated(
        self, engine: MatchingEngine, sample_schemes, household_profile: UserProfile
    ) -> None:
        profile_before = household_profile.model_dump()
        schemes_before = [s.model_dump() for s in sample_schemes]

        engine.find_matches(household_profile, sample_schemes)

        assert household_profile.model_dump() == profile_before
        assert [s.model_dump() for s in sample_schemes] == schemes_before

    def test_single_mandatory_criterion_scores_full(
        self, engine: MatchingEngine, make_criterion, make_scheme, farmer_profile: UserProfile
    ) -> None:
        scheme = make_scheme("kisan", [make_criterion("occupation", ComparisonOperator.EQUALS, "farmer")])

        [match] = engine.find_matches(farmer_profile, [scheme])

        assert match.is_fully_eligible is True
        assert match.eligibility_score == 100.0

    def test_mixed_catalog_ordering(
        self, engine: MatchingEngine, make_criterion, make_scheme, household_profile: UserProfile
    ) -> None:
        schemes = [
            make_scheme(
                "partial-optional",
                [
                    make_criterion("income_range", ComparisonOperator.IN, ["bpl"]),
                    make_criterion("caste_category", ComparisonOperator.EQUALS, "sc", mandatory=False),
                ],
            ),
            make_scheme(
                "optional-only",
                [make_criterion("gender", ComparisonOperator.EQUALS, "female", mandatory=False)],
            ),
            make_scheme("open-to-all"),
            make_scheme("impossible", [make_criterion("age", ComparisonOperator.GREATER_THAN, 150)]),
        ]

        matches = engine.find_matches(household_profile, schemes)

        assert "impossible" not in {m.scheme.id for m in matches}
        for match in matches:
            assert 0 < match.eligibility_score <= 100
            assert not match.missing_criteria or not match.is_fully_eligible
        order = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
        for a, b in zip(matches, matches[1:]):
            assert order[a.priority] <= order[b.priority]
            if a.priority == b.priority:
                assert a.eligibility_score >= b.eligibility_score
        per_scheme: dict[str, list[str]] = {}
        for match in matches:
            if match.specific_member_id is not None:
                per_scheme.setdefault(match.scheme.id, []).append(match.specific_member_id)
        for member_ids in per_scheme.values():
            assert len(member_ids) == len(set(member_ids))

    def test_deterministic(self, engine: MatchingEngine, sample_schemes, household_profile: UserProfile) -> None:
        first = [_key(m) for m in engine.find_matches(household_profile, sample_schemes)]
        second = [_key(m) for m in engine.find_matches(household_profile, sample_schemes)]
        assert first == second


# ---------------------------------------------------------------------------
# Ranking and grouping
# ---------------------------------------------------------------------------


def _result(scheme: GovernmentScheme, score: float, priority: Priority, *, eligible: bool = True) -> MatchResult:
    return MatchResult(
        scheme=scheme,
        eligibility_score=score,
        is_fully_eligible=eligible,
        priority=priority,
    )


class TestRankMatches:
    def test_priority_then_score(self, make_scheme) -> None:
        low = _result(make_scheme("low"), 30.0, Priority.LOW, eligible=False)
        medium = _result(make_scheme("medium"), 75.0, Priority.MEDIUM)
        high_90 = _result(make_scheme("high-90"), 90.0, Priority.HIGH)
        high_100 = _result(make_scheme("high-100"), 100.0, Priority.HIGH)

        ranked = MatchingEngine.rank_matches([low, medium, high_90, high_100])

        assert [m.scheme.id for m in ranked] == ["high-100", "high-90", "medium", "low"]

    def test_stable_for_ties(self, make_scheme) -> None:
        first = _result(make_scheme("first"), 100.0, Priority.HIGH)
        second = _result(make_scheme("second"), 100.0, Priority.HIGH)

        assert MatchingEngine.rank_matches([first, second]) == [first, second]
        assert MatchingEngine.rank_matches([second, first]) == [second, first]

    def test_returns_new_list(self, make_scheme) -> None:
        matches = [_result(make_scheme("a"), 60.0, Priority.MEDIUM)]
        ranked = MatchingEngine.rank_matches(matches)
        assert ranked == matches
        assert ranked is not matches


class TestCategorizeMatches:
    def test_groups_ordered_by_size(self, engine: MatchingEngine, sample_schemes, household_profile) -> None:
        matches = engine.find_matches(household_profile, sample_schemes)

        categories = engine.categorize_matches(matches)

        assert [(c.category, c.total_count) for c in categories] == [
            (BenefitType.HEALTHCARE, 4),
            (BenefitType.AGRICULTURE, 2),
            (BenefitType.WOMEN_WELFARE, 2),
            (BenefitType.SENIOR_CITIZEN, 1),
        ]
        assert categories[0].category_name == "Healthcare"
        assert sum(c.total_count for c in categories) == len(matches)
        for group in categories:
            assert len(group.results) == group.total_count
            assert all(m.scheme.benefit_type == group.category for m in group.results)

    def test_empty(self, engine: MatchingEngine) -> None:
        assert engine.categorize_matches([]) == []


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


class TestGetSummary:
    def test_household_summary(self, engine: MatchingEngine, sample_schemes, household_profile) -> None:
        matches = engine.find_matches(household_profile, sample_schemes)

        summary = engine.get_summary(matches, household_profile)

        assert summary.total_matches == 9
        assert summary.total_schemes_analyzed == 9
        assert summary.fully_eligible_count == 9
        assert summary.partially_eligible_count == 0
        assert len(summary.categorized_results) == 4

        members = [(s.member.id, s.match_count, len(s.top_schemes)) for s in summary.family_member_matches]
        assert members == [("m-parent", 4, 3), ("m-spouse", 2, 2), ("m-child", 1, 1)]

    def test_partial_eligibility_count(self, engine: MatchingEngine, make_scheme, farmer_profile) -> None:
        matches = [
            _result(make_scheme("a"), 65.0, Priority.MEDIUM, eligible=False),
            _result(make_scheme("b"), 50.0, Priority.MEDIUM, eligible=False),
            _result(make_scheme("c"), 100.0, Priority.HIGH),
        ]

        summary = engine.get_summary(matches, farmer_profile)

        assert summary.fully_eligible_count == 1
        assert summary.partially_eligible_count == 1
        assert summary.family_member_matches == []

    def test_top_schemes_limit(self, sample_schemes, household_profile) -> None:
        engine = MatchingEngine(top_schemes_per_member=1)
        summary = engine.get_summary(engine.find_matches(household_profile, sample_schemes), household_profile)
        assert all(len(s.top_schemes) == 1 for s in summary.family_member_matches)

    def test_unknown_member_skipped(self, engine: MatchingEngine, make_scheme, farmer_profile) -> None:
        orphan = MatchResult(
            scheme=make_scheme("orphan"),
            eligibility_score=100.0,
            is_fully_eligible=True,
            applicable_to=ApplicableTo.SPECIFIC_MEMBER,
            specific_member_id="ghost",
            priority=Priority.HIGH,
        )

        summary = engine.get_summary([orphan], farmer_profile)

        assert summary.total_matches == 1
        assert summary.family_member_matches == []


class TestMatchResultModel:
    def test_member_id_requires_specific_member(self, make_scheme) -> None:
        with pytest.raises(ValueError):
            MatchResult(
                scheme=make_scheme("x"),
                eligibility_score=100.0,
                is_fully_eligible=True,
                specific_member_id="m-1",
            )

    def test_score_bounds(self, make_scheme) -> None:
        with pytest.raises(ValueError):
            _result(make_scheme("x"), 120.0, Priority.HIGH)
