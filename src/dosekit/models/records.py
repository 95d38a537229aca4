"""
Upload record shapes.

These models define the service wire contract for the type-specific part
of each record. Field constraints mirror the service's own validation, so a
model that constructs cleanly serializes to a record the service accepts.
Records leave the pipeline as plain JSON-serializable dicts via to_record().
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from dosekit.constants import InsulinDeliveryConstants as IDC


class WireModel(BaseModel):
    """Base for models serialized with service field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        """Serialize using service field names, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SuppressedBasal(WireModel):
    """Scheduled basal rate overridden by a temporary basal."""

    type: Literal["basal"] = "basal"
    delivery_type: Literal["scheduled"] = Field(
        default="scheduled", alias="deliveryType"
    )
    rate: float = Field(description="Scheduled rate (units/hour)")


class TempBasal(WireModel):
    """Temporary basal delivered at a rate over a duration."""

    type: Literal["basal"] = "basal"
    delivery_type: Literal["temp"] = Field(default="temp", alias="deliveryType")
    duration: int = Field(
        gt=0, le=IDC.MAX_BASAL_DURATION_MS, description="Duration (milliseconds)"
    )
    rate: float = Field(
        ge=IDC.MIN_BASAL_RATE, le=IDC.MAX_BASAL_RATE, description="Units per hour"
    )
    suppressed: SuppressedBasal | None = Field(
        default=None, description="Underlying scheduled basal, if known"
    )


class NormalBolus(WireModel):
    """Single discrete bolus delivery."""

    type: Literal["bolus"] = "bolus"
    sub_type: Literal["normal"] = Field(default="normal", alias="subType")
    normal: float = Field(
        ge=IDC.MIN_BOLUS_NORMAL, le=IDC.MAX_BOLUS_NORMAL, description="Units delivered"
    )


class Origin(WireModel):
    """Provenance of an uploaded record."""

    id: str = Field(description="Identifier of the source sample")
    name: str | None = Field(default=None, description="Source name")
    version: str | None = Field(default=None, description="Source version")
    type: str = Field(default="service", description="Origin type")
