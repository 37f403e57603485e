from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Sequence, Set

from nltk.corpus import stopwords
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from news_trends.errors import InvalidArgumentError, InvalidInputError

LOGGER = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"https?://\S+|www\.\S+")
NUMBER_PATTERN = re.compile(r"\b\d+(?:[.,]\d+)*\b")

# ASCII punctuation plus the typographic marks common in scraped headlines.
PUNCTUATION = frozenset(string.punctuation) | frozenset("‘’‚“”„–—…«»¡¿•")
_PUNCTUATION_TABLE = str.maketrans({mark: " " for mark in PUNCTUATION})

STOPWORD_SOURCES = ("nltk", "sklearn")


@dataclass(frozen=True)
class CleaningOptions:
    """Configuration for text normalization."""

    lowercase: bool = True
    strip_urls: bool = False
    strip_numbers: bool = False
    min_token_length: int = 1
    include_default_stopwords: bool = True
    stopword_source: str = "nltk"  # "nltk" or "sklearn"


def strip_punctuation(text: str) -> str:
    return text.translate(_PUNCTUATION_TABLE)


def default_stop_words(source: str = "nltk") -> Set[str]:
    """Return the built-in English stop word list from NLTK or scikit-learn."""

    if source == "nltk":
        try:
            return set(stopwords.words("english"))
        except LookupError as exc:
            raise RuntimeError(
                "NLTK stopwords corpus is not installed. Run 'python -m nltk.downloader stopwords'."
            ) from exc
    if source == "sklearn":
        return set(ENGLISH_STOP_WORDS)
    raise InvalidArgumentError(f"Unknown stopword source '{source}'. Expected 'nltk' or 'sklearn'.")


def load_stop_words(
    stop_words_path: Path | None = None,
    *,
    include_default: bool = True,
    extra_stopwords: Sequence[str] | None = None,
    source: str = "nltk",
) -> Set[str]:
    """Compose a stop word list using optional defaults, file, and extras.

    Entries go through the same case folding and punctuation stripping as
    document text, so "don't" in the list removes the "don" and "t" tokens.
    """

    compiled: Set[str] = set()

    if include_default:
        compiled.update(default_stop_words(source))

    if stop_words_path:
        LOGGER.debug("Loading stop words from %s", stop_words_path)
        with stop_words_path.open("r", encoding="utf-8") as infile:
            compiled.update(line.strip() for line in infile if line.strip())

    if extra_stopwords:
        compiled.update(extra_stopwords)

    return {piece for word in compiled for piece in strip_punctuation(word.lower()).split()}


def normalize_text(text: str, options: CleaningOptions) -> str:
    cleaned = text
    if options.strip_urls:
        cleaned = URL_PATTERN.sub(" ", cleaned)
    if options.strip_numbers:
        cleaned = NUMBER_PATTERN.sub(" ", cleaned)
    if options.lowercase:
        cleaned = cleaned.lower()
    return strip_punctuation(cleaned)


def build_normalizer(
    stop_words: Set[str] | Iterable[str],
    options: CleaningOptions | None = None,
) -> Callable[[str], List[str]]:
    cleaning_options = options or CleaningOptions()
    if cleaning_options.min_token_length < 1:
        raise InvalidArgumentError("min_token_length must be at least 1.")
    compiled = frozenset(word.lower() for word in stop_words)

    def normalizer(text: str) -> List[str]:
        if not isinstance(text, str):
            raise InvalidInputError(f"Expected text to normalize, got {type(text).__name__}")
        return [
            token
            for token in normalize_text(text, cleaning_options).split()
            if len(token) >= cleaning_options.min_token_length and token.lower() not in compiled
        ]

    return normalizer


def normalize(
    text: str,
    stop_words: Set[str] | None = None,
    options: CleaningOptions | None = None,
) -> List[str]:
    """Lowercase, strip punctuation and drop stop words from a single document."""

    if not isinstance(text, str):
        raise InvalidInputError(f"Expected text to normalize, got {type(text).__name__}")
    if not text.strip():
        return []
    cleaning_options = options or CleaningOptions()
    if stop_words is None:
        stop_words = load_stop_words(
            include_default=cleaning_options.include_default_stopwords,
            source=cleaning_options.stopword_source,
        )
    return build_normalizer(stop_words, cleaning_options)(text)
