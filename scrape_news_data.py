"""Compatibility wrapper for scraping the news front pages.

Use the packaged CLI instead:
    python -m news_trends.cli scrape
or install the package and run `news-trends scrape`.
"""

from news_trends.cli import scrape_cli


if __name__ == "__main__":
    scrape_cli()
