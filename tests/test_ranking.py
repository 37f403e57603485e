from __future__ import annotations

import itertools
import math

import numpy as np
import pytest
from news_trends.cleaning import build_normalizer
from news_trends.errors import InvalidArgumentError
from news_trends.ranking import rank
from news_trends.vocabulary import build, make_documents
from news_trends.weighting import weight
from scipy import sparse

VOCABULARY = {"cats": 0, "chase": 1, "mice": 2, "dogs": 3}
SCENARIO_TFIDF = weight(sparse.csr_matrix(np.array([[1, 1, 1, 0], [1, 1, 0, 1]], dtype=np.int64)))


def test_rank_breaks_ties_by_vocabulary_index() -> None:
    ranked = rank(SCENARIO_TFIDF, VOCABULARY, top_k=4)

    assert [entry["keyword"] for entry in ranked] == ["cats", "chase", "mice", "dogs"]
    assert ranked[0]["tfidf"] == pytest.approx(1.0)
    assert ranked[2]["tfidf"] == pytest.approx((math.log(1.5) + 1) / 2)
    assert ranked[0]["tfidf"] == ranked[1]["tfidf"]
    assert ranked[2]["tfidf"] == ranked[3]["tfidf"]


def test_rank_truncates_to_top_k() -> None:
    ranked = rank(SCENARIO_TFIDF, VOCABULARY, top_k=2)

    assert [entry["keyword"] for entry in ranked] == ["cats", "chase"]


def test_top_k_above_vocabulary_returns_everything() -> None:
    ranked = rank(SCENARIO_TFIDF, VOCABULARY, top_k=50)

    assert len(ranked) == len(VOCABULARY)


@pytest.mark.parametrize("top_k", [0, -3, 2.5, True])
def test_rank_rejects_invalid_top_k(top_k: object) -> None:
    with pytest.raises(InvalidArgumentError):
        rank(SCENARIO_TFIDF, VOCABULARY, top_k=top_k)  # type: ignore[arg-type]


def test_nonzero_mean_favours_rare_terms() -> None:
    ranked = rank(SCENARIO_TFIDF, VOCABULARY, top_k=4, aggregate="nonzero_mean")

    assert [entry["keyword"] for entry in ranked] == ["mice", "dogs", "cats", "chase"]
    assert ranked[0]["tfidf"] == pytest.approx(math.log(1.5) + 1)


def test_sum_aggregate() -> None:
    ranked = rank(SCENARIO_TFIDF, VOCABULARY, top_k=1, aggregate="sum")

    assert ranked == [{"keyword": "cats", "tfidf": pytest.approx(2.0)}]


def test_unknown_aggregate() -> None:
    with pytest.raises(InvalidArgumentError):
        rank(SCENARIO_TFIDF, VOCABULARY, aggregate="median")


def test_vocabulary_must_match_matrix() -> None:
    with pytest.raises(InvalidArgumentError):
        rank(SCENARIO_TFIDF, {"cats": 0, "chase": 1}, top_k=2)
    with pytest.raises(InvalidArgumentError):
        rank(SCENARIO_TFIDF, {"cats": 0, "chase": 1, "mice": 1, "dogs": 3}, top_k=2)


def test_empty_vocabulary_ranks_nothing() -> None:
    tfidf = weight(sparse.csr_matrix((2, 0), dtype=np.int64))

    assert rank(tfidf, {}, top_k=5) == []


def test_scores_are_non_increasing() -> None:
    rng = np.random.default_rng(7)
    counts = rng.integers(0, 3, size=(12, 30))
    counts[:, 0] = 1
    vocabulary = {f"term{index}": index for index in range(30)}

    ranked = rank(weight(sparse.csr_matrix(counts)), vocabulary, top_k=30)
    scores = [entry["tfidf"] for entry in ranked]
    indices = [vocabulary[entry["keyword"]] for entry in ranked]

    for position in range(1, len(ranked)):
        assert scores[position - 1] >= scores[position]
        if scores[position - 1] == scores[position]:
            assert indices[position - 1] < indices[position]


@pytest.mark.parametrize("counts", list(itertools.permutations((1, 2, 7))) + [(3, 5, 11), (1, 1, 9)])
def test_mirrored_counts_tie_regardless_of_row_order(counts: tuple[int, int, int]) -> None:
    first, middle, last = counts
    texts = [
        " ".join(["x"] * first + ["y"] * last),
        " ".join(["x"] * middle + ["y"] * middle),
        " ".join(["x"] * last + ["y"] * first),
        "z",
    ]
    vocabulary, matrix = build(make_documents(texts), build_normalizer(set()))

    for aggregate in ("mean", "nonzero_mean", "sum"):
        ranked = rank(weight(matrix), vocabulary, top_k=3, aggregate=aggregate)

        assert [entry["keyword"] for entry in ranked[:2]] == ["x", "y"]
        assert ranked[0]["tfidf"] == ranked[1]["tfidf"]
