"""Keyword trends across scraped news headlines using TF-IDF."""

from .cleaning import CleaningOptions, load_stop_words, normalize
from .errors import EmptyCorpusError, InvalidArgumentError, InvalidInputError
from .pipeline import CorpusReport, PipelineConfig, PipelineResult, run_pipeline
from .ranking import rank
from .types import Document, RankedKeyword
from .vocabulary import build
from .weighting import TfidfMatrix, weight

__all__ = [
    "normalize",
    "load_stop_words",
    "build",
    "weight",
    "rank",
    "run_pipeline",
    "CleaningOptions",
    "PipelineConfig",
    "PipelineResult",
    "CorpusReport",
    "TfidfMatrix",
    "Document",
    "RankedKeyword",
    "InvalidInputError",
    "EmptyCorpusError",
    "InvalidArgumentError",
]
