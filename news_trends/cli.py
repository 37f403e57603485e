from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .cleaning import STOPWORD_SOURCES, CleaningOptions
from .pipeline import PipelineConfig, run_pipeline
from .plotting import plot_keywords
from .ranking import AGGREGATES
from .scraping import scrape_websites
from .snapshots import (
    SNAPSHOT_PATTERN,
    corpus_from_frame,
    find_snapshots,
    load_snapshots,
    save_keywords,
    save_snapshot,
)
from .weighting import IDF_SCHEMES, TF_SCHEMES

LOGGER = logging.getLogger(__name__)


def env_path(var_name: str, default: str) -> Path:
    return Path(os.getenv(var_name, default))


def env_int(var_name: str, default: int) -> int:
    return int(os.getenv(var_name, str(default)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="News headline keyword trends")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape_parser = subparsers.add_parser("scrape", help="Scrape news sites and write a dated CSV snapshot")
    scrape_parser.add_argument(
        "--output-dir",
        type=Path,
        default=env_path("SNAPSHOT_DIR", "."),
        help="Directory for scraped_data_<date>.csv (default: %(default)s or SNAPSHOT_DIR)",
    )
    scrape_parser.add_argument(
        "--timeout",
        type=float,
        default=float(os.getenv("SCRAPE_TIMEOUT", "10")),
        help="Per-request timeout in seconds (default: %(default)s or SCRAPE_TIMEOUT)",
    )

    trends_parser = subparsers.add_parser("trends", help="Rank keywords across scraped snapshots")
    trends_parser.add_argument(
        "--input-file",
        type=Path,
        action="append",
        default=[],
        help="Snapshot CSV to include (can be repeated; overrides --snapshot-dir)",
    )
    trends_parser.add_argument(
        "--snapshot-dir",
        type=Path,
        default=env_path("SNAPSHOT_DIR", "."),
        help="Directory searched for snapshots (default: %(default)s or SNAPSHOT_DIR)",
    )
    trends_parser.add_argument(
        "--pattern",
        default=os.getenv("SNAPSHOT_PATTERN", SNAPSHOT_PATTERN),
        help="Glob for snapshot files (default: %(default)s or SNAPSHOT_PATTERN)",
    )
    trends_parser.add_argument(
        "--text-column",
        default=os.getenv("TEXT_COLUMN", "title"),
        help="Column holding document text (default: %(default)s or TEXT_COLUMN)",
    )
    trends_parser.add_argument(
        "--include-summary",
        action="store_true",
        help="Append the summary column to each document's text",
    )
    trends_parser.add_argument(
        "--top-k",
        type=int,
        default=env_int("TOP_K", 10),
        help="Number of keywords to keep (default: %(default)s or TOP_K)",
    )
    trends_parser.add_argument(
        "--tf-scheme",
        choices=sorted(TF_SCHEMES),
        default=os.getenv("TF_SCHEME", "raw"),
        help="Term-frequency scheme (default: %(default)s or TF_SCHEME)",
    )
    trends_parser.add_argument(
        "--idf-scheme",
        choices=sorted(IDF_SCHEMES),
        default=os.getenv("IDF_SCHEME", "smooth"),
        help="Inverse-document-frequency scheme (default: %(default)s or IDF_SCHEME)",
    )
    trends_parser.add_argument(
        "--aggregate",
        choices=sorted(AGGREGATES),
        default=os.getenv("SCORE_AGGREGATE", "mean"),
        help="How per-document weights become a keyword score (default: %(default)s or SCORE_AGGREGATE)",
    )
    trends_parser.add_argument(
        "--stop-words",
        type=Path,
        default=os.getenv("STOP_WORDS_PATH"),
        help="Optional stop-word file to merge with defaults (or override if --no-default-stopwords)",
    )
    trends_parser.add_argument(
        "--extra-stopword",
        action="append",
        default=[],
        help="Additional stop words (can be repeated)",
    )
    trends_parser.add_argument(
        "--stopword-source",
        choices=STOPWORD_SOURCES,
        default=os.getenv("STOPWORD_SOURCE", "nltk"),
        help="Built-in English stop word list (default: %(default)s or STOPWORD_SOURCE)",
    )
    trends_parser.add_argument(
        "--no-default-stopwords",
        action="store_false",
        dest="include_default_stopwords",
        help="Do not use the built-in English stop word list",
    )
    trends_parser.add_argument(
        "--min-token-length",
        type=int,
        default=env_int("MIN_TOKEN_LENGTH", 1),
        help="Minimum token length to keep (default: %(default)s or MIN_TOKEN_LENGTH)",
    )
    trends_parser.add_argument(
        "--strip-urls",
        action="store_true",
        help="Remove URLs before tokenizing",
    )
    trends_parser.add_argument(
        "--strip-numbers",
        action="store_true",
        help="Remove numbers before tokenizing",
    )
    trends_parser.add_argument(
        "--output",
        type=Path,
        default=env_path("KEYWORDS_CSV", "top_keywords.csv"),
        help="Destination for the keyword/tfidf table (default: %(default)s or KEYWORDS_CSV)",
    )
    trends_parser.add_argument(
        "--chart",
        type=Path,
        default=os.getenv("KEYWORDS_CHART"),
        help="Optional PNG path for a bar chart of the ranked keywords (or KEYWORDS_CHART)",
    )

    return parser


def run_scrape(args: argparse.Namespace) -> Path:
    frame = scrape_websites(timeout=args.timeout)
    path = save_snapshot(frame, args.output_dir)
    LOGGER.info("Data scraping completed")
    return path


def run_trends(args: argparse.Namespace) -> Path:
    paths = args.input_file or find_snapshots(args.snapshot_dir, args.pattern)
    frame = load_snapshots(paths)
    texts = corpus_from_frame(frame, args.text_column, include_summary=args.include_summary)

    config = PipelineConfig(
        top_k=args.top_k,
        tf_scheme=args.tf_scheme,
        idf_scheme=args.idf_scheme,
        aggregate=args.aggregate,
        cleaning=CleaningOptions(
            strip_urls=args.strip_urls,
            strip_numbers=args.strip_numbers,
            min_token_length=args.min_token_length,
            include_default_stopwords=args.include_default_stopwords,
            stopword_source=args.stopword_source,
        ),
        stop_words_path=args.stop_words,
        extra_stopwords=tuple(args.extra_stopword),
    )
    result = run_pipeline(texts, config)
    if result.report.excluded_count:
        LOGGER.warning("%d documents were excluded from the corpus", result.report.excluded_count)

    save_keywords(result.keywords, args.output)
    if args.chart is not None:
        plot_keywords(result.keywords, args.chart)
    return args.output


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "scrape":
        run_scrape(args)
    elif args.command == "trends":
        run_trends(args)
    else:
        parser.error("No command provided")


def scrape_cli() -> None:
    argv = sys.argv[1:]
    main(["scrape", *argv])


def trends_cli() -> None:
    argv = sys.argv[1:]
    main(["trends", *argv])


if __name__ == "__main__":
    main()
