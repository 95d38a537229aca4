"""
Transform report generation and export.

Records which samples were discarded and why, and exports the report in
JSON and CSV formats for offline inspection.
"""

import csv
import json

from collections import Counter
from pathlib import Path

from pydantic import BaseModel, Field

from dosekit.errors import DiscardReason


class DiscardedSample(BaseModel):
    """A sample dropped from the upload batch."""

    index: int = Field(ge=0, description="Position in the input sample sequence")
    sample_id: str | None = Field(default=None, description="Source sample uuid")
    reason: DiscardReason = Field(description="Discard reason")
    detail: str = Field(default="", description="Human-readable detail")


class TransformReport(BaseModel):
    """Outcome of preparing one category batch."""

    category: str = Field(description="Sample category")
    total_samples: int = Field(ge=0, description="Samples received")
    filtered_out: int = Field(ge=0, description="Samples removed by the filter stage")
    emitted: int = Field(ge=0, description="Records produced")
    discards: list[DiscardedSample] = Field(
        default_factory=list, description="Per-sample discards, in input order"
    )

    def counts_by_reason(self) -> dict[DiscardReason, int]:
        """Number of discards for each reason that occurred."""
        return dict(Counter(d.reason for d in self.discards))

    @property
    def discarded(self) -> int:
        return len(self.discards)


def export_report_json(report: TransformReport, output_path: Path) -> None:
    """
    Export transform report as JSON.

    Args:
        report: Transform report to export
        output_path: Path to output JSON file
    """
    data = report.model_dump(mode="json")
    data["counts_by_reason"] = {
        reason.value: count for reason, count in report.counts_by_reason().items()
    }
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)


def export_report_csv(report: TransformReport, output_path: Path) -> None:
    """
    Export the discarded samples of a transform report as CSV.

    Args:
        report: Transform report to export
        output_path: Path to output CSV file
    """
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(
            f,
            fieldnames=["category", "index", "sample_id", "reason", "detail"],
        )
        writer.writeheader()

        for discard in report.discards:
            writer.writerow(
                {
                    "category": report.category,
                    "index": discard.index,
                    "sample_id": discard.sample_id or "",
                    "reason": discard.reason.value,
                    "detail": discard.detail,
                }
            )
