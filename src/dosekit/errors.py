"""
Exception hierarchy for upload preparation.

Two tiers:
- Sample-local failures (``SampleDiscarded`` and subclasses) drop a single
  sample from the output and are reported, never propagated past the sample.
- Pipeline-level failures (``PipelineError`` and subclasses) abort the batch
  for a whole category.
"""

from enum import Enum


class DiscardReason(str, Enum):
    """Why a sample was dropped from the upload batch."""

    MISSING_REASON = "MissingReason"
    UNKNOWN_REASON = "UnknownReason"
    NON_POSITIVE_DURATION = "NonPositiveDuration"
    EXCESSIVE_DURATION = "ExcessiveDuration"
    RATE_OUT_OF_RANGE = "RateOutOfRange"
    AMOUNT_OUT_OF_RANGE = "AmountOutOfRange"
    INCOMPATIBLE_UNIT = "IncompatibleUnit"
    UNEXPECTED_ERROR = "UnexpectedError"


class SampleDiscarded(Exception):
    """Base exception for a sample that cannot become an upload record."""

    reason: DiscardReason = DiscardReason.UNEXPECTED_ERROR

    def __init__(self, message: str, sample_id: str | None = None):
        super().__init__(message)
        self.sample_id = sample_id


class MissingReasonError(SampleDiscarded):
    """Delivery-reason metadata is absent."""

    reason = DiscardReason.MISSING_REASON


class UnknownReasonError(SampleDiscarded):
    """Delivery-reason metadata is present but not a known reason."""

    reason = DiscardReason.UNKNOWN_REASON


class NonPositiveDurationError(SampleDiscarded):
    reason = DiscardReason.NON_POSITIVE_DURATION


class ExcessiveDurationError(SampleDiscarded):
    reason = DiscardReason.EXCESSIVE_DURATION


class RateOutOfRangeError(SampleDiscarded):
    reason = DiscardReason.RATE_OUT_OF_RANGE


class AmountOutOfRangeError(SampleDiscarded):
    reason = DiscardReason.AMOUNT_OUT_OF_RANGE


class IncompatibleUnitError(ValueError):
    """A quantity cannot be expressed in the requested unit."""

    def __init__(self, unit: str, target_unit: str):
        super().__init__(f"Unit '{unit}' is not compatible with '{target_unit}'")
        self.unit = unit
        self.target_unit = target_unit


class PipelineError(Exception):
    """Base exception for failures that abort a whole category batch."""


class UnsupportedCategoryError(PipelineError):
    """No sample type or handler is available for a category."""

    def __init__(self, category: str, message: str | None = None):
        super().__init__(message or f"Sample category '{category}' is not supported")
        self.category = category
