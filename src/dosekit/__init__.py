"""
dosekit: insulin delivery sample preparation for clinical data upload.

Classifies raw insulin delivery samples as basal or bolus, derives and
range-checks the service fields, and attaches common fields and metadata.
Samples that fail validation are dropped and reported, never fatal.

Quick Start:
    >>> from dosekit import SampleCategory, UploadPipeline
    >>> pipeline = UploadPipeline(source)
    >>> result = pipeline.prepare(SampleCategory.INSULIN, samples)
    >>> upload(result.records)
"""

from dosekit.errors import (
    DiscardReason,
    PipelineError,
    SampleDiscarded,
    UnsupportedCategoryError,
)
from dosekit.models import DeliveryReason, Quantity, RawSample, SampleCategory
from dosekit.pipeline import TransformReport, TransformResult, UploadPipeline

__all__ = [
    "DeliveryReason",
    "DiscardReason",
    "PipelineError",
    "Quantity",
    "RawSample",
    "SampleCategory",
    "SampleDiscarded",
    "TransformReport",
    "TransformResult",
    "UnsupportedCategoryError",
    "UploadPipeline",
]
