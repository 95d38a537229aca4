"""
Upload preparation pipeline and its batch report.
"""

from dosekit.pipeline.orchestrator import (
    SampleSource,
    TransformResult,
    UploadPipeline,
)
from dosekit.pipeline.report import (
    DiscardedSample,
    TransformReport,
    export_report_csv,
    export_report_json,
)

__all__ = [
    "DiscardedSample",
    "SampleSource",
    "TransformReport",
    "TransformResult",
    "UploadPipeline",
    "export_report_csv",
    "export_report_json",
]
