from __future__ import annotations

from datetime import datetime

import pytest

from data.feeds.csv_feed import read_snapshots_csv
from report import AnnotationReportColumn, NumericReportColumn, Report
from strategies import (
    AndStrategy,
    BollingerBandsWidthStrategy,
    BuyAndHoldStrategy,
    DelayStrategy,
    NoFlatStrategy,
)


def _dates(n):
    return iter([datetime(2024, 1, i + 1) for i in range(n)])


def test_report_dataframe_zips_columns():
    report = Report("demo", _dates(3))
    chart = report.add_chart()
    report.add_column(NumericReportColumn("Close", iter([1.0, 2.0, 3.0])))
    report.add_column(AnnotationReportColumn(iter(["B", "", "S"])))
    report.add_column(NumericReportColumn("Outcome", iter([0.0, 5.0, 10.0])), chart)

    frame = report.to_dataframe()

    assert list(frame.columns) == ["Close", "Annotation", "Outcome"]
    assert frame["Close"].tolist() == [1.0, 2.0, 3.0]
    assert frame["Annotation"].tolist() == ["B", "", "S"]
    # Segunda llamada: mismo frame (los streams ya se consumieron)
    assert report.to_dataframe() is frame


def test_report_rejects_unknown_chart():
    report = Report("demo", _dates(1))
    with pytest.raises(ValueError):
        report.add_column(NumericReportColumn("x", iter([1.0])), 3)


def test_strategy_report_columns(snapshots_csv):
    report = BuyAndHoldStrategy().report(read_snapshots_csv(snapshots_csv))
    frame = report.to_dataframe()

    assert report.title == "Buy and Hold"
    assert len(frame) == 40
    assert list(frame.columns) == ["Close", "Annotation", "Outcome"]
    assert frame["Annotation"].iloc[0] == "B"
    # Buy & Hold: outcome (%) = variación del cierre desde el primer día
    assert frame["Outcome"].iloc[19] == pytest.approx(30.0)


def test_noflat_report_adds_flatness(snapshots_csv):
    strategy = NoFlatStrategy(5, 1.0, BuyAndHoldStrategy())
    frame = strategy.report(read_snapshots_csv(snapshots_csv)).to_dataframe()

    assert "Flatness" in frame.columns
    assert len(frame) == 40
    assert frame["Flatness"].iloc[5] == 0.0


def test_bbw_report_has_bands(snapshots_csv):
    strategy = BollingerBandsWidthStrategy(period=5, sensitivity=0.05)
    frame = strategy.report(read_snapshots_csv(snapshots_csv)).to_dataframe()

    assert list(frame.columns) == ["Close", "Upper", "Middle", "Lower", "Annotation", "Outcome"]
    assert len(frame) == 40
    assert frame["Upper"].iloc[:4].tolist() == [0.0] * 4


def test_write_to_file(tmp_path, snapshots_csv):
    strategy = DelayStrategy(2, AndStrategy.with_strategies(BuyAndHoldStrategy()))
    out = strategy.report(read_snapshots_csv(snapshots_csv)).write_to_file(tmp_path / "r.html")

    assert out.exists()
    assert "D(AND(Buy and Hold))" in out.read_text(encoding="utf-8")


def test_report_with_zero_close():
    from strategy_helpers import make_snapshots

    frame = BuyAndHoldStrategy().report(make_snapshots([0.0, 1.0, 2.0])).to_dataframe()
    assert frame["Outcome"].tolist() == [0.0, 0.0, 0.0]
