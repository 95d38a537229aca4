"""Data models shared across the upload pipeline."""

from dosekit.models.quantity import Quantity
from dosekit.models.records import NormalBolus, Origin, SuppressedBasal, TempBasal
from dosekit.models.samples import DeliveryReason, RawSample, SampleCategory

__all__ = [
    "DeliveryReason",
    "NormalBolus",
    "Origin",
    "Quantity",
    "RawSample",
    "SampleCategory",
    "SuppressedBasal",
    "TempBasal",
]
