"""Tests for pairwise cosine similarity."""

import math
from itertools import combinations

import pytest
from pydantic import ValidationError

from docsim import SimilarityPair, TermCount, cosine_similarity, filter_pairs, pairwise_similarity


def _counts(vectors: dict[str, dict[str, int]]) -> list[TermCount]:
    return [
        TermCount(group=g, term=t, count=c)
        for g, vector in vectors.items()
        for t, c in vector.items()
    ]


class TestCosineSimilarity:
    """Tests for sparse cosine similarity."""

    def test_identical_vectors(self):
        assert cosine_similarity({"cat": 1, "sat": 1}, {"cat": 1, "sat": 1}) == 1.0

    def test_proportional_vectors(self):
        assert cosine_similarity({"a": 1, "b": 2}, {"a": 2, "b": 4}) == 1.0

    def test_no_shared_terms(self):
        assert cosine_similarity({"cat": 3}, {"dog": 2}) == 0.0

    def test_zero_vector(self):
        assert cosine_similarity({}, {"dog": 2}) == 0.0
        assert cosine_similarity({}, {}) == 0.0

    def test_partial_overlap(self):
        score = cosine_similarity({"a": 1, "b": 1}, {"a": 1, "c": 1})
        assert score == pytest.approx(0.5)

    def test_symmetric(self):
        u = {"a": 3, "b": 1, "c": 2}
        v = {"a": 1, "c": 5}
        assert cosine_similarity(u, v) == cosine_similarity(v, u)

    def test_known_value(self):
        u = {"a": 1, "b": 2, "c": 3}
        v = {"a": 4, "b": 5, "c": 6}
        expected = 32 / (math.sqrt(14) * math.sqrt(77))
        assert cosine_similarity(u, v) == pytest.approx(expected)


class TestPairwiseSimilarity:
    """Tests for all-pairs similarity."""

    @pytest.fixture
    def four_groups(self):
        return _counts({
            "A": {"cat": 1, "sat": 1},
            "B": {"cat": 2, "sat": 2},
            "C": {"cat": 1, "dog": 3},
            "D": {"fish": 4},
        })

    def test_one_pair_per_unordered_pair(self, four_groups):
        pairs = pairwise_similarity(four_groups)
        assert len(pairs) == 6
        keys = {p.key for p in pairs}
        assert keys == set(combinations(["A", "B", "C", "D"], 2))

    def test_no_self_pairs(self, four_groups):
        for pair in pairwise_similarity(four_groups):
            assert pair.group_a != pair.group_b
            assert pair.group_a < pair.group_b

    def test_scores_in_unit_interval(self, four_groups):
        for pair in pairwise_similarity(four_groups):
            assert 0.0 <= pair.score <= 1.0

    def test_sorted_descending(self, four_groups):
        pairs = pairwise_similarity(four_groups)
        scores = [p.score for p in pairs]
        assert scores == sorted(scores, reverse=True)
        assert pairs[0].key == ("A", "B")
        assert pairs[0].score == 1.0

    def test_ties_broken_by_group_names(self, four_groups):
        zeros = [p.key for p in pairwise_similarity(four_groups) if p.score == 0.0]
        assert zeros == [("A", "D"), ("B", "D"), ("C", "D")]

    def test_groups_without_terms_included(self):
        pairs = pairwise_similarity(_counts({"A": {"cat": 1}}), groups=["A", "Empty"])
        assert len(pairs) == 1
        assert pairs[0].key == ("A", "Empty")
        assert pairs[0].score == 0.0

    def test_single_group_has_no_pairs(self):
        assert pairwise_similarity(_counts({"A": {"cat": 1}})) == []

    def test_progress_bar(self, four_groups):
        assert pairwise_similarity(four_groups, show_progress=True) == pairwise_similarity(four_groups)


class TestSimilarityPair:
    """Tests for the unordered pair schema."""

    def test_reversed_groups_normalized(self):
        pair = SimilarityPair(group_a="B", group_b="A", score=0.3)
        assert pair.key == ("A", "B")
        assert pair == SimilarityPair(group_a="A", group_b="B", score=0.3)

    def test_self_pair_rejected(self):
        with pytest.raises(ValidationError):
            SimilarityPair(group_a="A", group_b="A", score=1.0)

    def test_score_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            SimilarityPair(group_a="A", group_b="B", score=1.5)


class TestFilterPairs:
    """Tests for filtering pairs by group name."""

    def test_keeps_rank_order(self):
        pairs = pairwise_similarity(_counts({
            "A": {"x": 1, "y": 1},
            "B": {"x": 1, "y": 1},
            "C": {"x": 1, "z": 3},
        }))
        filtered = filter_pairs(pairs, "C")
        assert [p.key for p in filtered] == [("A", "C"), ("B", "C")]
        assert all(p.involves("C") for p in filtered)

    def test_unknown_group(self):
        assert filter_pairs([SimilarityPair(group_a="A", group_b="B", score=0.1)], "Z") == []
