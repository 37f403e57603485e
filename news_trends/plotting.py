from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from news_trends.types import RankedKeyword  # noqa: E402

LOGGER = logging.getLogger(__name__)


def plot_keywords(
    keywords: Sequence[RankedKeyword],
    output_path: Path,
    *,
    title: str = "Top keywords by TF-IDF",
) -> Path:
    """Save a horizontal bar chart of ranked keywords, highest score on top."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    labels = [entry["keyword"] for entry in reversed(keywords)]
    scores = [entry["tfidf"] for entry in reversed(keywords)]

    fig, ax = plt.subplots(figsize=(10, max(3.0, 0.45 * len(labels) + 1.5)))
    try:
        ax.barh(labels, scores, color="steelblue")
        ax.set_xlabel("TF-IDF score")
        ax.set_ylabel("Keyword")
        ax.set_title(title)
        if not labels:
            ax.text(0.5, 0.5, "(no keywords)", ha="center", va="center", transform=ax.transAxes)
        fig.tight_layout()
        LOGGER.info("Saving keyword chart to %s", output_path)
        fig.savefig(output_path)
    finally:
        plt.close(fig)
    return output_path
