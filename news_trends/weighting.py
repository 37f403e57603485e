from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np
from numpy.typing import NDArray
from scipy import sparse

from news_trends.errors import InvalidArgumentError, InvalidInputError

LOGGER = logging.getLogger(__name__)
FloatArray = NDArray[np.float64]
IntArray = NDArray[np.int64]


def _raw_tf(counts: FloatArray) -> FloatArray:
    return counts


def _boolean_tf(counts: FloatArray) -> FloatArray:
    return np.ones_like(counts)


def _log_tf(counts: FloatArray) -> FloatArray:
    return 1.0 + np.log(counts)


def _smooth_idf(document_frequency: IntArray, n_documents: int) -> FloatArray:
    return np.log((1.0 + n_documents) / (1.0 + document_frequency)) + 1.0


def _plain_idf(document_frequency: IntArray, n_documents: int) -> FloatArray:
    if np.any(document_frequency == 0):
        raise InvalidInputError("The 'plain' idf scheme is undefined for terms that occur in no document.")
    return np.log(n_documents / document_frequency.astype(np.float64)) + 1.0


def _unary_idf(document_frequency: IntArray, n_documents: int) -> FloatArray:
    return np.ones(document_frequency.shape[0], dtype=np.float64)


TF_SCHEMES: Dict[str, Callable[[FloatArray], FloatArray]] = {
    "raw": _raw_tf,
    "boolean": _boolean_tf,
    "log": _log_tf,
}

IDF_SCHEMES: Dict[str, Callable[[IntArray, int], FloatArray]] = {
    "smooth": _smooth_idf,
    "plain": _plain_idf,
    "unary": _unary_idf,
}


@dataclass(frozen=True)
class TfidfMatrix:
    """TF-IDF weights together with the statistics used to produce them."""

    weights: sparse.csr_matrix
    document_frequency: IntArray
    idf: FloatArray
    tf_scheme: str
    idf_scheme: str

    @property
    def shape(self) -> tuple[int, int]:
        return self.weights.shape


def validate_schemes(tf_scheme: str, idf_scheme: str) -> None:
    if tf_scheme not in TF_SCHEMES:
        raise InvalidArgumentError(
            f"Unknown tf_scheme '{tf_scheme}'. Expected one of {', '.join(sorted(TF_SCHEMES))}."
        )
    if idf_scheme not in IDF_SCHEMES:
        raise InvalidArgumentError(
            f"Unknown idf_scheme '{idf_scheme}'. Expected one of {', '.join(sorted(IDF_SCHEMES))}."
        )


def document_frequency(matrix: sparse.spmatrix) -> IntArray:
    """Number of documents in which each column has a non-zero count."""

    csc = sparse.csc_matrix(matrix)
    csc.eliminate_zeros()
    return np.diff(csc.indptr).astype(np.int64)


def weight(
    matrix: sparse.spmatrix,
    *,
    tf_scheme: str = "raw",
    idf_scheme: str = "smooth",
) -> TfidfMatrix:
    """Turn a document-term count matrix into TF-IDF weights.

    Only stored cells are transformed, so a term missing from a document
    always weighs zero there whatever its idf.
    """

    validate_schemes(tf_scheme, idf_scheme)

    counts = sparse.csr_matrix(matrix, dtype=np.float64, copy=True)
    counts.eliminate_zeros()
    counts.sort_indices()
    if counts.nnz and counts.data.min() < 0:
        raise InvalidInputError("Document-term counts must be non-negative.")

    n_documents = counts.shape[0]
    frequencies = document_frequency(counts)
    idf = IDF_SCHEMES[idf_scheme](frequencies, n_documents)

    weights = counts
    weights.data = TF_SCHEMES[tf_scheme](weights.data) * idf[weights.indices]

    LOGGER.info(
        "Weighted %d documents x %d terms (tf=%s, idf=%s)",
        n_documents,
        counts.shape[1],
        tf_scheme,
        idf_scheme,
    )
    return TfidfMatrix(
        weights=weights,
        document_frequency=frequencies,
        idf=idf,
        tf_scheme=tf_scheme,
        idf_scheme=idf_scheme,
    )
