from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import cycle, islice
from typing import Iterable, List, Sequence

import pandas as pd
import requests
from bs4 import BeautifulSoup

LOGGER = logging.getLogger(__name__)

SNAPSHOT_COLUMNS = ["title", "summary", "source", "timestamp"]
DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; news-trends/0.1)"}


@dataclass(frozen=True)
class Website:
    """A news front page and the CSS selectors for its headlines."""

    url: str
    title_css: str
    summary_css: str | None = None


DEFAULT_WEBSITES: tuple[Website, ...] = (
    Website(
        "https://www.theguardian.com/us",
        ".dcr-16c50tn .dcr-1elvov .dcr-dbozpd .dcr-1ay6c8s",
        ".dcr-1usp5i4",
    ),
    Website("https://www.chinadaily.com.cn/", ".twBox .txt1"),
    Website("https://www.dailymail.co.uk/home/index.html", ".articletext > p", ".linkro-darkred"),
    Website("https://www.thestar.com/", ".tnt-headline", ".tnt-summary"),
    Website("https://www.smh.com.au/", "._3N1qW", "._3XEsE"),
)


def _recycle(values: Sequence[str], length: int) -> List[str]:
    if not values:
        return [""] * length
    return list(islice(cycle(values), length))


def select_text(soup: BeautifulSoup, css: str) -> List[str]:
    return [element.get_text(strip=True) for element in soup.select(css)]


def scrape_site(
    url: str,
    title_css: str,
    summary_css: str | None = None,
    *,
    session: requests.Session | None = None,
    timeout: float = 10.0,
) -> pd.DataFrame | None:
    """Scrape headline titles and optional summaries from a page.

    Returns None when the page cannot be fetched. When both selectors match,
    the shorter list is repeated to the length of the longer one.
    """

    if session is None:
        with requests.Session() as client:
            return scrape_site(url, title_css, summary_css, session=client, timeout=timeout)

    try:
        response = session.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        LOGGER.error("An error occurred while scraping %s: %s", url, exc)
        return None

    soup = BeautifulSoup(response.text, "html.parser")
    titles = select_text(soup, title_css)
    if summary_css is None:
        summaries = [""] * len(titles)
    else:
        summaries = select_text(soup, summary_css)
        length = max(len(titles), len(summaries))
        titles = _recycle(titles, length)
        summaries = _recycle(summaries, length)

    LOGGER.info("Scraped %d items from %s", len(titles), url)
    return pd.DataFrame(
        {
            "title": titles,
            "summary": summaries,
            "source": [url] * len(titles),
            "timestamp": [pd.Timestamp.now()] * len(titles),
        },
        columns=SNAPSHOT_COLUMNS,
    )


def scrape_websites(
    websites: Iterable[Website] = DEFAULT_WEBSITES,
    *,
    session: requests.Session | None = None,
    timeout: float = 10.0,
) -> pd.DataFrame:
    """Scrape every website and combine the successful results."""

    if session is None:
        with requests.Session() as client:
            return scrape_websites(websites, session=client, timeout=timeout)

    frames = []
    for site in websites:
        frame = scrape_site(site.url, site.title_css, site.summary_css, session=session, timeout=timeout)
        if frame is not None:
            frames.append(frame)

    if not frames:
        LOGGER.warning("No website could be scraped")
        return pd.DataFrame(columns=SNAPSHOT_COLUMNS)
    return pd.concat(frames, ignore_index=True)
