from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Iterable, List, Sequence

import numpy as np
from scipy import sparse

from news_trends.cleaning import build_normalizer, load_stop_words
from news_trends.errors import EmptyCorpusError
from news_trends.types import Document, Vocabulary

LOGGER = logging.getLogger(__name__)


def make_documents(texts: Iterable[str]) -> List[Document]:
    return [Document(doc_id=position, text=text) for position, text in enumerate(texts)]


def build(
    corpus: Sequence[Document],
    normalizer: Callable[[str], List[str]] | None = None,
) -> tuple[Vocabulary, sparse.csr_matrix]:
    """Create the vocabulary and sparse document-term count matrix.

    Terms are indexed in the order they are first seen, scanning documents
    in corpus order and tokens in document order. Documents without tokens
    keep an all-zero row.
    """

    if len(corpus) == 0:
        raise EmptyCorpusError("Cannot build a vocabulary from an empty corpus.")

    tokenize = normalizer or build_normalizer(load_stop_words())
    vocabulary: Vocabulary = {}
    rows: list[int] = []
    columns: list[int] = []
    counts: list[int] = []
    empty_rows = 0

    for row_index, document in enumerate(corpus):
        token_counts = Counter(tokenize(document.text))
        if not token_counts:
            empty_rows += 1
        for token, count in token_counts.items():
            rows.append(row_index)
            columns.append(vocabulary.setdefault(token, len(vocabulary)))
            counts.append(count)

    coordinates = (np.asarray(rows, dtype=np.int64), np.asarray(columns, dtype=np.int64))
    matrix = sparse.csr_matrix(
        (np.asarray(counts, dtype=np.int64), coordinates),
        shape=(len(corpus), len(vocabulary)),
        dtype=np.int64,
    )
    matrix.sort_indices()

    LOGGER.info(
        "Built %d x %d document-term matrix (%d documents without tokens)",
        matrix.shape[0],
        matrix.shape[1],
        empty_rows,
    )
    return vocabulary, matrix
