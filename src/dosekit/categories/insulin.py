"""
Insulin delivery category.

Turns insulin delivery samples into basal or bolus upload records:
- Basal samples become temp basals with a duration (ms) and a rate (units/hour),
  plus the suppressed scheduled basal when the sample metadata carries one.
- Bolus samples become normal boluses with the delivered amount.

Range checks follow the service's own syntax rules; a sample that fails one
is rejected with a SampleDiscarded subclass naming the rule.
"""

import logging
import math

from collections.abc import Sequence
from typing import Any

from dosekit.categories.base import CategoryHandler
from dosekit.categories.filters import pass_through
from dosekit.constants import (
    METADATA_KEY_INSULIN_DELIVERY_REASON,
    METADATA_KEY_SCHEDULED_BASAL_RATE,
    MILLISECONDS_PER_SECOND,
    SAMPLE_TYPE_INSULIN_DELIVERY,
    SECONDS_PER_HOUR,
    UNIT_INSULIN,
    UNIT_INSULIN_PER_HOUR,
)
from dosekit.constants import InsulinDeliveryConstants as IDC
from dosekit.errors import (
    AmountOutOfRangeError,
    ExcessiveDurationError,
    MissingReasonError,
    NonPositiveDurationError,
    RateOutOfRangeError,
    UnknownReasonError,
)
from dosekit.models.quantity import Quantity
from dosekit.models.records import NormalBolus, SuppressedBasal, TempBasal
from dosekit.models.samples import DeliveryReason, RawSample, SampleCategory

logger = logging.getLogger(__name__)


def _in_range(value: float, low: float, high: float) -> bool:
    return math.isfinite(value) and low <= value <= high


def filter_insulin_samples(samples: Sequence[RawSample]) -> list[RawSample]:
    """Insulin samples are not pre-filtered."""
    return pass_through(samples)


def classify_delivery_reason(sample: RawSample) -> DeliveryReason:
    """
    Decode the delivery reason from sample metadata.

    Args:
        sample: Insulin delivery sample

    Returns:
        DeliveryReason.BASAL or DeliveryReason.BOLUS

    Raises:
        MissingReasonError: If the metadata has no delivery reason
        UnknownReasonError: If the delivery reason is not basal or bolus
    """
    raw = sample.metadata.get(METADATA_KEY_INSULIN_DELIVERY_REASON)
    if raw is None:
        raise MissingReasonError(
            "Insulin sample has no delivery reason", sample_id=sample.uuid
        )
    # bool is an int subclass but never a valid raw value
    if isinstance(raw, int) and not isinstance(raw, bool):
        try:
            return DeliveryReason(raw)
        except ValueError:
            pass
    raise UnknownReasonError(
        f"Unknown insulin delivery reason: {raw!r}", sample_id=sample.uuid
    )


def build_suppressed_schedule(
    sample: RawSample, delivered_units: float
) -> SuppressedBasal | None:
    """
    Build the suppressed scheduled basal for a temp basal sample.

    Present only when the metadata carries a scheduled rate in units/hour.
    The bounds check is applied to the delivered quantity, not to the
    scheduled rate. This matches the upstream uploader and is likely a bug
    there; it is kept so records stay identical to what that uploader sends.

    Args:
        sample: Basal sample
        delivered_units: Sample quantity in insulin units

    Returns:
        SuppressedBasal or None
    """
    scheduled = sample.metadata.get(METADATA_KEY_SCHEDULED_BASAL_RATE)
    if not isinstance(scheduled, Quantity):
        return None
    if not scheduled.is_compatible_with(UNIT_INSULIN_PER_HOUR):
        logger.debug(
            f"Ignoring scheduled basal rate with incompatible unit: {scheduled.unit}"
        )
        return None
    if not _in_range(delivered_units, IDC.MIN_BASAL_RATE, IDC.MAX_BASAL_RATE):
        return None
    return SuppressedBasal(rate=scheduled.value_in(UNIT_INSULIN_PER_HOUR))


def transform_basal(sample: RawSample) -> dict[str, Any]:
    """
    Build temp basal fields from a basal delivery sample.

    Args:
        sample: Sample classified as basal

    Returns:
        Type-specific record fields

    Raises:
        NonPositiveDurationError: If the interval is not longer than 0 ms
        ExcessiveDurationError: If the interval exceeds 24 hours
        RateOutOfRangeError: If the computed rate is outside [0, 100] units/hour
        IncompatibleUnitError: If the quantity is not an insulin amount
    """
    value = sample.quantity.value_in(UNIT_INSULIN)
    seconds = sample.duration_seconds
    duration_ms = int(seconds * MILLISECONDS_PER_SECOND)

    if duration_ms <= 0:
        raise NonPositiveDurationError(
            f"Basal insulin entry has non-positive duration: {duration_ms}",
            sample_id=sample.uuid,
        )
    if duration_ms > IDC.MAX_BASAL_DURATION_MS:
        raise ExcessiveDurationError(
            f"Basal insulin entry has excessive duration: {duration_ms}",
            sample_id=sample.uuid,
        )

    rate = value / (seconds / SECONDS_PER_HOUR)
    if not _in_range(rate, IDC.MIN_BASAL_RATE, IDC.MAX_BASAL_RATE):
        raise RateOutOfRangeError(
            f"Basal insulin entry has out-of-range rate: {rate}",
            sample_id=sample.uuid,
        )

    logger.debug(f"Insulin basal value = {value}, rate = {rate}")
    basal = TempBasal(
        duration=duration_ms,
        rate=rate,
        suppressed=build_suppressed_schedule(sample, value),
    )
    return basal.to_record()


def transform_bolus(sample: RawSample) -> dict[str, Any]:
    """
    Build normal bolus fields from a bolus delivery sample.

    Raises:
        AmountOutOfRangeError: If the amount is outside [0, 100] units
        IncompatibleUnitError: If the quantity is not an insulin amount
    """
    value = sample.quantity.value_in(UNIT_INSULIN)
    if not _in_range(value, IDC.MIN_BOLUS_NORMAL, IDC.MAX_BOLUS_NORMAL):
        raise AmountOutOfRangeError(
            f"Bolus insulin entry has out-of-range normal: {value}",
            sample_id=sample.uuid,
        )
    logger.debug(f"Insulin bolus value = {value}")
    return NormalBolus(normal=value).to_record()


INSULIN_HANDLER = CategoryHandler(
    category=SampleCategory.INSULIN,
    sample_type=SAMPLE_TYPE_INSULIN_DELIVERY,
    filter_samples=filter_insulin_samples,
    classify=classify_delivery_reason,
    transformers={
        DeliveryReason.BASAL: transform_basal,
        DeliveryReason.BOLUS: transform_bolus,
    },
    consumed_metadata_keys=frozenset(
        {METADATA_KEY_INSULIN_DELIVERY_REASON, METADATA_KEY_SCHEDULED_BASAL_RATE}
    ),
)
