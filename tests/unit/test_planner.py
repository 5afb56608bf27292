"""
Unit tests for the distribution planner (select_claims).

Tests request validation, single-tier and progressive planning, top-ups,
the subject fallback and the uniqueness / size guarantees.
"""

import dataclasses
import random

import pytest

from claimcheck.selection import (
    DifficultyMode,
    InvalidCountError,
    SelectionRequest,
    UnknownDifficultyModeError,
    parse_difficulty_mode,
    select_claims,
    split_progressive_counts,
)


class ExplodingCatalog(list):
    """Catalog that fails if anything tries to read it."""

    def __iter__(self):
        raise AssertionError("catalog was read")


def ids(result):
    return [claim.id for claim in result]


class TestSplitProgressiveCounts:
    @pytest.mark.parametrize(
        "count,expected",
        [
            (10, (3, 4, 3)),
            (5, (2, 2, 1)),
            (7, (3, 3, 1)),
            (3, (1, 2, 0)),
            (2, (1, 1, 0)),
            (1, (1, 1, 0)),
            (20, (6, 8, 6)),
        ],
    )
    def test_split(self, count, expected):
        tranches = split_progressive_counts(count)

        assert (tranches.easy, tranches.medium, tranches.hard) == expected

    def test_sum_never_short_of_count(self):
        for count in range(1, 200):
            tranches = split_progressive_counts(count)
            assert count <= tranches.total <= count + 1


class TestValidation:
    @pytest.mark.parametrize("count", [0, -3, 2.5, 5.0, True, "5", None])
    def test_invalid_count_rejected_before_pool_work(self, count):
        request = SelectionRequest(count=count, difficulty_mode="easy")

        with pytest.raises(InvalidCountError) as exc_info:
            select_claims(request, ExplodingCatalog())

        assert exc_info.value.count == count

    @pytest.mark.parametrize("mode", ["expert", "EASY", "", None, 3])
    def test_unknown_mode_rejected_before_pool_work(self, mode):
        request = SelectionRequest(count=5, difficulty_mode=mode)

        with pytest.raises(UnknownDifficultyModeError):
            select_claims(request, ExplodingCatalog())

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            select_claims(SelectionRequest(count=0), [])

    def test_parse_accepts_enum_and_token(self):
        assert parse_difficulty_mode(DifficultyMode.HARD) is DifficultyMode.HARD
        assert parse_difficulty_mode("mixed") is DifficultyMode.MIXED


class TestSingleTier:
    def test_draws_requested_tier(self, tiered_catalog, rng):
        result = select_claims(SelectionRequest(count=5, difficulty_mode="medium"), tiered_catalog, rng=rng)

        assert len(result) == 5
        assert all(c.difficulty == "medium" for c in result)

    def test_prefers_unseen_within_tier(self, tiered_catalog, rng):
        seen = {f"easy-{i:02d}" for i in range(5)}
        request = SelectionRequest(count=5, difficulty_mode="easy", individual_seen=seen)
        result = select_claims(request, tiered_catalog, rng=rng)

        assert set(ids(result)) == {f"easy-{i:02d}" for i in range(5, 10)}

    def test_group_exposure_counts_as_seen(self, tiered_catalog, rng):
        request = SelectionRequest(
            count=4,
            difficulty_mode="hard",
            individual_seen={"hard-00", "hard-01", "hard-02"},
            group_seen={"hard-03", "hard-04", "hard-05"},
        )
        result = select_claims(request, tiered_catalog, rng=rng)

        assert set(ids(result)) == {"hard-06", "hard-07", "hard-08", "hard-09"}

    def test_tops_up_from_other_tiers(self, make_claim, rng):
        catalog = [make_claim("e1", "easy"), make_claim("e2", "easy")]
        catalog += [make_claim(f"m{i}", "medium") for i in range(5)]
        result = select_claims(SelectionRequest(count=5, difficulty_mode="easy"), catalog, rng=rng)

        assert len(result) == 5
        assert set(ids(result)[:2]) == {"e1", "e2"}
        assert all(c.difficulty == "medium" for c in result[2:])
        assert result.fallback_used is False

    def test_all_seen_still_fills_count(self, tiered_catalog, rng):
        all_ids = {c.id for c in tiered_catalog}
        half = set(sorted(all_ids)[:15])
        request = SelectionRequest(
            count=8,
            difficulty_mode="easy",
            individual_seen=half,
            group_seen=all_ids - half,
        )
        result = select_claims(request, tiered_catalog, rng=rng)

        assert len(result) == 8
        assert all(c.difficulty == "easy" for c in result)

    def test_small_pool_returns_what_exists(self, make_claim, rng):
        catalog = [make_claim("a"), make_claim("b")]
        request = SelectionRequest(count=5, difficulty_mode="easy", individual_seen={"a", "b"})
        result = select_claims(request, catalog, rng=rng)

        assert sorted(ids(result)) == ["a", "b"]
        assert result.shortfall == 3

    def test_empty_catalog_returns_empty_result(self, rng):
        result = select_claims(SelectionRequest(count=3, difficulty_mode="hard"), [], rng=rng)

        assert len(result) == 0
        assert result.requested == 3


class TestProgressive:
    def test_blocks_ordered_easy_medium_hard(self, tiered_catalog, rng):
        result = select_claims(SelectionRequest(count=10, difficulty_mode="mixed"), tiered_catalog, rng=rng)
        tiers = [c.difficulty for c in result]

        assert tiers == ["easy"] * 3 + ["medium"] * 4 + ["hard"] * 3

    def test_short_tier_topped_up_at_the_end(self, make_claim, rng):
        catalog = [make_claim(f"e{i}", "easy") for i in range(10)]
        catalog += [make_claim(f"m{i}", "medium") for i in range(10)]
        catalog += [make_claim("h0", "hard")]
        result = select_claims(SelectionRequest(count=10, difficulty_mode="mixed"), catalog, rng=rng)
        tiers = [c.difficulty for c in result]

        assert len(result) == 10
        assert tiers[:8] == ["easy"] * 3 + ["medium"] * 4 + ["hard"]
        assert all(t in ("easy", "medium") for t in tiers[8:])

    def test_count_of_one_keeps_the_easy_claim(self, tiered_catalog, rng):
        result = select_claims(SelectionRequest(count=1, difficulty_mode="mixed"), tiered_catalog, rng=rng)

        assert len(result) == 1
        assert result[0].difficulty == "easy"

    def test_prefers_unseen_in_each_tier(self, tiered_catalog, rng):
        seen = {f"{tier}-{i:02d}" for tier in ("easy", "medium", "hard") for i in range(5)}
        result = select_claims(
            SelectionRequest(count=10, difficulty_mode=DifficultyMode.MIXED, group_seen=seen),
            tiered_catalog,
            rng=rng,
        )

        assert not set(ids(result)) & seen


class TestSubjectFallback:
    def test_fills_from_full_catalog(self, biology_fallback_catalog, rng):
        request = SelectionRequest(count=5, difficulty_mode="easy", subjects=["Biology"])
        result = select_claims(request, biology_fallback_catalog, rng=rng)

        assert len(result) == 5
        assert set(ids(result)[:3]) == {"1", "2", "3"}
        assert set(ids(result)[3:]) <= {str(i) for i in range(4, 11)}
        assert result.fallback_used is True

    def test_not_used_without_subjects(self, make_claim, rng):
        catalog = [make_claim("a"), make_claim("b")]
        result = select_claims(SelectionRequest(count=5, difficulty_mode="easy"), catalog, rng=rng)

        assert len(result) == 2
        assert result.fallback_used is False

    def test_not_used_when_subject_pool_suffices(self, tiered_catalog, rng):
        request = SelectionRequest(count=5, difficulty_mode="easy", subjects=["History"])
        result = select_claims(request, tiered_catalog, rng=rng)

        assert all(c.subject == "History" for c in result)
        assert result.fallback_used is False

    def test_fallback_ignores_grade_level(self, make_claim, rng):
        catalog = [
            make_claim("b1", subject="Biology", grade_level="high"),
            make_claim("x1", subject="History", grade_level="high"),
            make_claim("x2", subject="History", grade_level="elementary"),
        ]
        request = SelectionRequest(count=3, difficulty_mode="easy", subjects=["Biology"], grade_level="high")
        result = select_claims(request, catalog, rng=rng)

        assert ids(result)[0] == "b1"
        assert set(ids(result)) == {"b1", "x1", "x2"}
        assert result.fallback_used is True

    def test_fallback_does_not_prefer_unseen(self, make_claim):
        catalog = [make_claim("b1", subject="Biology")]
        catalog += [make_claim(f"x{i}", subject="History") for i in range(10)]
        seen = {f"x{i}" for i in range(5)}
        request = SelectionRequest(
            count=3, difficulty_mode="easy", subjects=["Biology"], individual_seen=seen
        )

        # With unseen-first the two extras could never be seen claims
        drew_seen = False
        for seed in range(40):
            result = select_claims(request, catalog, rng=random.Random(seed))
            assert len(result) == 3
            drew_seen = drew_seen or any(claim_id in seen for claim_id in ids(result)[1:])

        assert drew_seen

    def test_fallback_draws_contributed_items(self, make_claim, rng):
        catalog = [make_claim("b1", subject="Biology")]
        contributed = [make_claim("u1", subject="Art"), make_claim("u2", subject="Art")]
        request = SelectionRequest(
            count=3, difficulty_mode="easy", subjects=["Biology"], contributed_items=contributed
        )
        result = select_claims(request, catalog, rng=rng)

        assert ids(result)[0] == "b1"
        assert set(ids(result)[1:]) == {"u1", "u2"}
        assert result.fallback_used is True

    def test_bare_string_subject_filters_normally(self, make_claim, rng):
        catalog = [make_claim(f"b{i}", subject="Biology") for i in range(5)]
        request = SelectionRequest(count=3, difficulty_mode="easy", subjects="Biology")
        result = select_claims(request, catalog, rng=rng)

        assert len(result) == 3
        assert result.fallback_used is False


class TestInvariants:
    def test_contributed_duplicate_ids_never_repeat(self, tiered_catalog, make_claim):
        contributed = [make_claim("easy-00", "easy"), make_claim("easy-00", "hard"), make_claim("new", "easy")]
        for seed in range(25):
            for mode in ("easy", "medium", "hard", "mixed"):
                request = SelectionRequest(count=30, difficulty_mode=mode, contributed_items=contributed)
                result = select_claims(request, tiered_catalog, rng=random.Random(seed))

                assert len(ids(result)) == len(set(ids(result)))
                assert len(result) == 30

    def test_size_bound_over_random_requests(self, tiered_catalog):
        gen = random.Random(42)
        for seed in range(50):
            count = gen.randint(1, 40)
            mode = gen.choice(["easy", "medium", "hard", "mixed"])
            seen = {c.id for c in tiered_catalog if gen.random() < 0.5}
            request = SelectionRequest(count=count, difficulty_mode=mode, individual_seen=seen)
            result = select_claims(request, tiered_catalog, rng=random.Random(seed))

            assert len(result) == min(count, len(tiered_catalog))
            assert len(set(ids(result))) == len(result)

    def test_unidentified_claims_never_selected(self, make_claim, rng):
        catalog = [make_claim(None), make_claim(None), make_claim(""), make_claim("real")]
        result = select_claims(SelectionRequest(count=4, difficulty_mode="easy"), catalog, rng=rng)

        assert ids(result) == ["real"]

    def test_same_seed_same_selection(self, tiered_catalog):
        request = SelectionRequest(count=10, difficulty_mode="mixed", subjects=["Biology", "History"])
        first = select_claims(request, tiered_catalog, rng=random.Random(5))
        second = select_claims(request, tiered_catalog, rng=random.Random(5))

        assert ids(first) == ids(second)

    def test_request_is_immutable(self):
        request = SelectionRequest(count=3, subjects=["Biology"], individual_seen=["a"])

        assert request.subjects == ("Biology",)
        assert request.individual_seen == frozenset({"a"})
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.count = 4
