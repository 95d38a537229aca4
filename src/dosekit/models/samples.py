"""
Raw sample model consumed by the upload pipeline.

Samples are produced by the acquisition layer and never mutated here.
"""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dosekit.constants import (
    INSULIN_DELIVERY_REASON_BASAL,
    INSULIN_DELIVERY_REASON_BOLUS,
)
from dosekit.models.quantity import Quantity


class SampleCategory(str, Enum):
    """Sample categories the host application may ask to upload."""

    INSULIN = "insulin"
    BLOOD_GLUCOSE = "blood_glucose"
    CARBS = "carbs"
    WORKOUT = "workout"


class DeliveryReason(IntEnum):
    """Insulin delivery reason decoded from sample metadata."""

    BASAL = INSULIN_DELIVERY_REASON_BASAL
    BOLUS = INSULIN_DELIVERY_REASON_BOLUS


class RawSample(BaseModel):
    """
    One time-stamped measurement from the acquisition layer.

    Instantaneous events carry ``end == start``. No ordering check is done
    on the interval: a reversed interval is a per-sample discard downstream.
    """

    model_config = ConfigDict(frozen=True)

    uuid: str | None = Field(default=None, description="Source-assigned identifier")
    sample_type: str = Field(description="Source quantity type identifier")
    start: datetime = Field(description="Start time (naive values are UTC)")
    end: datetime = Field(description="End time")
    quantity: Quantity = Field(description="Sample quantity")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Opaque source metadata"
    )
    source_name: str | None = Field(
        default=None, description="Writing app or device (e.g., bundle id)"
    )
    source_version: str | None = Field(default=None, description="Source version")

    @property
    def duration_seconds(self) -> float:
        """Interval length in seconds (negative for reversed intervals)."""
        return (self.end - self.start).total_seconds()
