from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd

from news_trends.errors import InvalidArgumentError
from news_trends.types import RankedKeyword

LOGGER = logging.getLogger(__name__)

SNAPSHOT_PATTERN = "scraped_data_*.csv"
KEYWORD_COLUMNS = ["keyword", "tfidf"]


def snapshot_path(output_dir: Path, day: date | None = None) -> Path:
    return output_dir / f"scraped_data_{(day or date.today()).isoformat()}.csv"


def save_snapshot(frame: pd.DataFrame, output_dir: Path, day: date | None = None) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = snapshot_path(output_dir, day)
    LOGGER.info("Writing %d scraped rows to %s", len(frame), path)
    frame.to_csv(path, index=False)
    return path


def find_snapshots(directory: Path, pattern: str = SNAPSHOT_PATTERN) -> List[Path]:
    if not directory.is_dir():
        raise NotADirectoryError(f"Snapshot directory is not a directory: {directory}")
    return sorted(directory.glob(pattern))


def load_snapshots(paths: Iterable[Path], dedupe_on: Sequence[str] = ("title", "summary")) -> pd.DataFrame:
    """Read scraped CSV snapshots into one table, dropping rows repeated across files."""

    frames = []
    for path in paths:
        LOGGER.debug("Loading snapshot %s", path)
        frames.append(pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""]))
    if not frames:
        raise FileNotFoundError("No snapshot files to load.")

    combined = pd.concat(frames, ignore_index=True)
    subset = [column for column in dedupe_on if column in combined.columns]
    deduplicated = combined.drop_duplicates(subset=subset or None, ignore_index=True)
    LOGGER.info(
        "Loaded %d rows from %d snapshots (%d duplicates dropped)",
        len(deduplicated),
        len(frames),
        len(combined) - len(deduplicated),
    )
    return deduplicated


def corpus_from_frame(
    frame: pd.DataFrame,
    text_column: str = "title",
    *,
    include_summary: bool = False,
    summary_column: str = "summary",
) -> List[object]:
    """Extract raw document texts; missing values are kept for the pipeline to report.

    With include_summary, a row missing its title falls back to the summary alone.
    """

    if text_column not in frame.columns:
        raise InvalidArgumentError(f"Column '{text_column}' not found; available: {', '.join(frame.columns)}")

    texts = [None if pd.isna(value) else value for value in frame[text_column].tolist()]
    if not include_summary:
        return texts
    if summary_column not in frame.columns:
        raise InvalidArgumentError(f"Column '{summary_column}' not found; available: {', '.join(frame.columns)}")

    summaries = ["" if pd.isna(value) else str(value) for value in frame[summary_column].tolist()]
    combined: List[object] = []
    for text, summary in zip(texts, summaries):
        if text is None:
            combined.append(summary or None)
        else:
            combined.append(f"{text} {summary}" if summary else text)
    return combined


def keywords_frame(keywords: Sequence[RankedKeyword]) -> pd.DataFrame:
    return pd.DataFrame(list(keywords), columns=KEYWORD_COLUMNS)


def save_keywords(keywords: Sequence[RankedKeyword], output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    LOGGER.info("Writing %d keywords to %s", len(keywords), output_path)
    keywords_frame(keywords).to_csv(output_path, index=False)
    return output_path
