from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, List, Tuple

from news_trends.cleaning import CleaningOptions, build_normalizer, load_stop_words
from news_trends.errors import InvalidInputError
from news_trends.ranking import rank, validate_aggregate, validate_top_k
from news_trends.types import Document, ExcludedDocument, RankedKeyword, Vocabulary
from news_trends.vocabulary import build
from news_trends.weighting import TfidfMatrix, validate_schemes, weight

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    """Everything a single keyword-ranking run needs besides the corpus."""

    top_k: int = 10
    tf_scheme: str = "raw"
    idf_scheme: str = "smooth"
    aggregate: str = "mean"
    cleaning: CleaningOptions = field(default_factory=CleaningOptions)
    stop_words_path: Path | None = None
    extra_stopwords: Tuple[str, ...] = ()

    def validate(self) -> None:
        validate_top_k(self.top_k)
        validate_schemes(self.tf_scheme, self.idf_scheme)
        validate_aggregate(self.aggregate)


@dataclass(frozen=True)
class CorpusReport:
    received: int
    accepted: int
    excluded: Tuple[ExcludedDocument, ...] = ()
    empty_documents: int = 0

    @property
    def excluded_count(self) -> int:
        return len(self.excluded)


@dataclass(frozen=True)
class PipelineResult:
    keywords: List[RankedKeyword]
    vocabulary: Vocabulary
    tfidf: TfidfMatrix
    report: CorpusReport


def prepare_corpus(texts: Iterable[object]) -> tuple[List[Document], CorpusReport]:
    """Wrap raw entries as Documents, setting aside the ones that are not text.

    Accepted documents are numbered contiguously; excluded entries keep their
    original position in the report.
    """

    documents: List[Document] = []
    excluded: List[ExcludedDocument] = []
    received = 0
    for position, text in enumerate(texts):
        received += 1
        try:
            documents.append(Document(doc_id=len(documents), text=text))  # type: ignore[arg-type]
        except InvalidInputError as exc:
            LOGGER.warning("Excluding document at position %d: %s", position, exc)
            excluded.append(ExcludedDocument(position=position, reason=str(exc)))

    if excluded:
        LOGGER.warning("Excluded %d of %d documents that could not be normalized", len(excluded), received)
    return documents, CorpusReport(received=received, accepted=len(documents), excluded=tuple(excluded))


def run_pipeline(texts: Iterable[object], config: PipelineConfig | None = None) -> PipelineResult:
    """Rank the most distinctive keywords of a corpus of raw text strings."""

    pipeline_config = config or PipelineConfig()
    pipeline_config.validate()

    stop_words = load_stop_words(
        pipeline_config.stop_words_path,
        include_default=pipeline_config.cleaning.include_default_stopwords,
        extra_stopwords=pipeline_config.extra_stopwords,
        source=pipeline_config.cleaning.stopword_source,
    )
    normalizer = build_normalizer(stop_words, pipeline_config.cleaning)

    documents, report = prepare_corpus(texts)
    LOGGER.info("Running keyword pipeline on %d documents", report.accepted)

    vocabulary, counts = build(documents, normalizer)
    empty_documents = int((counts.getnnz(axis=1) == 0).sum())
    report = replace(report, empty_documents=empty_documents)

    tfidf = weight(counts, tf_scheme=pipeline_config.tf_scheme, idf_scheme=pipeline_config.idf_scheme)
    keywords = rank(tfidf, vocabulary, pipeline_config.top_k, aggregate=pipeline_config.aggregate)
    return PipelineResult(keywords=keywords, vocabulary=vocabulary, tfidf=tfidf, report=report)

