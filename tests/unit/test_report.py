"""Tests for transform report export."""

import csv
import json

import pytest

from dosekit.errors import DiscardReason
from dosekit.pipeline.report import (
    DiscardedSample,
    TransformReport,
    export_report_csv,
    export_report_json,
)


@pytest.fixture
def report():
    return TransformReport(
        category="insulin",
        total_samples=5,
        filtered_out=1,
        emitted=2,
        discards=[
            DiscardedSample(
                index=0,
                sample_id="A",
                reason=DiscardReason.MISSING_REASON,
                detail="Insulin sample has no delivery reason",
            ),
            DiscardedSample(index=2, sample_id=None, reason=DiscardReason.MISSING_REASON),
        ],
    )


class TestTransformReport:
    def test_counts_by_reason(self, report):
        assert report.counts_by_reason() == {DiscardReason.MISSING_REASON: 2}
        assert report.discarded == 2

    def test_empty_report(self):
        empty = TransformReport(
            category="insulin", total_samples=0, filtered_out=0, emitted=0
        )
        assert empty.counts_by_reason() == {}


class TestExport:
    def test_json(self, report, tmp_path):
        output = tmp_path / "report.json"

        export_report_json(report, output)
        data = json.loads(output.read_text())

        assert data["category"] == "insulin"
        assert data["discards"][0]["reason"] == "MissingReason"
        assert data["counts_by_reason"] == {"MissingReason": 2}

    def test_csv(self, report, tmp_path):
        output = tmp_path / "report.csv"

        export_report_csv(report, output)
        with open(output, newline="") as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 2
        assert rows[0] == {
            "category": "insulin",
            "index": "0",
            "sample_id": "A",
            "reason": "MissingReason",
            "detail": "Insulin sample has no delivery reason",
        }
        assert rows[1]["sample_id"] == ""
