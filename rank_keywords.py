"""Compatibility wrapper for ranking keywords across scraped snapshots.

Use the packaged CLI instead:
    python -m news_trends.cli trends
or install the package and run `news-trends trends`.
"""

from news_trends.cli import trends_cli


if __name__ == "__main__":
    trends_cli()
