from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List

import numpy as np
from numpy.typing import NDArray

from news_trends.errors import InvalidArgumentError
from news_trends.types import RankedKeyword, Vocabulary
from news_trends.weighting import TfidfMatrix

LOGGER = logging.getLogger(__name__)
FloatArray = NDArray[np.float64]


def _column_sums(tfidf: TfidfMatrix) -> FloatArray:
    # Exactly rounded, so the sum does not depend on row order.
    csc = tfidf.weights.tocsc()
    return np.array(
        [math.fsum(csc.data[start:end]) for start, end in zip(csc.indptr[:-1], csc.indptr[1:])],
        dtype=np.float64,
    )


def _corpus_mean(tfidf: TfidfMatrix) -> FloatArray:
    return _column_sums(tfidf) / tfidf.shape[0]


def _nonzero_mean(tfidf: TfidfMatrix) -> FloatArray:
    sums = _column_sums(tfidf)
    frequencies = tfidf.document_frequency.astype(np.float64)
    return np.divide(sums, frequencies, out=np.zeros_like(sums), where=frequencies > 0)


AGGREGATES: Dict[str, Callable[[TfidfMatrix], FloatArray]] = {
    "mean": _corpus_mean,
    "nonzero_mean": _nonzero_mean,
    "sum": _column_sums,
}


def validate_top_k(top_k: int) -> None:
    if isinstance(top_k, bool) or not isinstance(top_k, (int, np.integer)):
        raise InvalidArgumentError(f"top_k must be an integer, got {type(top_k).__name__}")
    if top_k <= 0:
        raise InvalidArgumentError(f"top_k must be positive, got {top_k}")


def validate_aggregate(aggregate: str) -> None:
    if aggregate not in AGGREGATES:
        raise InvalidArgumentError(
            f"Unknown aggregate '{aggregate}'. Expected one of {', '.join(sorted(AGGREGATES))}."
        )


def terms_by_index(vocabulary: Vocabulary, n_terms: int) -> List[str]:
    if len(vocabulary) != n_terms:
        raise InvalidArgumentError(
            f"Vocabulary has {len(vocabulary)} terms but the matrix has {n_terms} columns."
        )
    terms: List[str | None] = [None] * n_terms
    for term, index in vocabulary.items():
        if not 0 <= index < n_terms or terms[index] is not None:
            raise InvalidArgumentError(f"Vocabulary index {index} for '{term}' is out of range or duplicated.")
        terms[index] = term
    return [term for term in terms if term is not None]


def term_scores(tfidf: TfidfMatrix, *, aggregate: str = "mean") -> FloatArray:
    validate_aggregate(aggregate)
    return AGGREGATES[aggregate](tfidf)


def rank(
    tfidf: TfidfMatrix,
    vocabulary: Vocabulary,
    top_k: int = 10,
    *,
    aggregate: str = "mean",
) -> List[RankedKeyword]:
    """Return the top_k terms by aggregated TF-IDF weight.

    The default score is the mean weight over every document in the corpus,
    counting zeros for documents without the term. Equal scores are ordered
    by vocabulary index, i.e. the term seen first in the corpus wins.
    """

    validate_top_k(top_k)
    terms = terms_by_index(vocabulary, tfidf.shape[1])
    scores = term_scores(tfidf, aggregate=aggregate)

    # lexsort orders by the last key first.
    order = np.lexsort((np.arange(scores.shape[0]), -scores))[:top_k]
    ranked: List[RankedKeyword] = [
        {"keyword": terms[index], "tfidf": float(scores[index])} for index in order
    ]
    LOGGER.info("Ranked %d of %d terms (aggregate=%s)", len(ranked), len(terms), aggregate)
    return ranked
