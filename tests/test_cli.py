from __future__ import annotations

from datetime import date
from pathlib import Path

import news_trends.cli as cli
import pandas as pd
import pytest
from pytest import MonkeyPatch


def _write_snapshot(directory: Path, day: date, titles: list[str]) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(
        {
            "title": titles,
            "summary": [""] * len(titles),
            "source": ["https://news.test/"] * len(titles),
            "timestamp": ["2024-05-01"] * len(titles),
        }
    ).to_csv(directory / f"scraped_data_{day.isoformat()}.csv", index=False)


def test_trends_command_writes_keywords_and_chart(tmp_path: Path) -> None:
    snapshots = tmp_path / "snapshots"
    _write_snapshot(snapshots, date(2024, 5, 1), ["Cats chase mice.", "Dogs chase cats."])
    _write_snapshot(snapshots, date(2024, 5, 2), ["Dogs chase cats.", "The mice hide"])
    output = tmp_path / "keywords.csv"
    chart = tmp_path / "keywords.png"

    cli.main(
        [
            "trends",
            "--snapshot-dir",
            str(snapshots),
            "--no-default-stopwords",
            "--extra-stopword",
            "the",
            "--top-k",
            "3",
            "--output",
            str(output),
            "--chart",
            str(chart),
        ]
    )

    table = pd.read_csv(output)
    assert list(table.columns) == ["keyword", "tfidf"]
    assert len(table) == 3
    assert table["tfidf"].is_monotonic_decreasing
    assert "the" not in set(table["keyword"])
    assert chart.exists()


def test_trends_command_rejects_bad_scheme(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["trends", "--snapshot-dir", str(tmp_path), "--tf-scheme", "bogus"])


def test_scrape_command_saves_snapshot(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    frame = pd.DataFrame(
        {"title": ["Storm hits"], "summary": [""], "source": ["https://news.test/"], "timestamp": ["now"]}
    )
    monkeypatch.setattr(cli, "scrape_websites", lambda timeout: frame)

    cli.main(["scrape", "--output-dir", str(tmp_path)])

    written = list(tmp_path.glob("scraped_data_*.csv"))
    assert len(written) == 1
    assert pd.read_csv(written[0])["title"].tolist() == ["Storm hits"]
