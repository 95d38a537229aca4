"""Merge residual sample metadata into a record's payload."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from dosekit.constants import FIELD_PAYLOAD
from dosekit.merge.common import format_time
from dosekit.models.quantity import Quantity


def payload_value(value: Any) -> Any:
    """
    Convert a metadata value for the payload.

    Datetimes, quantities and enum members get a JSON-friendly form.
    Anything else is passed through as-is.
    """
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, Quantity):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def residual_metadata(
    metadata: Mapping[str, Any], consumed_keys: Iterable[str] = ()
) -> dict[str, Any]:
    """Metadata without the keys already consumed by classification or derivation."""
    consumed = set(consumed_keys)
    return {key: value for key, value in metadata.items() if key not in consumed}


def add_metadata(record: dict[str, Any], metadata: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return a copy of the record with metadata merged into its payload.

    Keys that already exist at the record's top level or in its payload are
    skipped. No payload key is added when nothing is merged.

    Args:
        record: Record to merge into
        metadata: Residual sample metadata

    Returns:
        New record dict
    """
    merged = dict(record)
    existing = merged.get(FIELD_PAYLOAD)
    if existing is not None and not isinstance(existing, Mapping):
        return merged
    payload = dict(existing) if existing is not None else {}

    for key, value in metadata.items():
        if key in merged or key in payload:
            continue
        payload[key] = payload_value(value)

    if payload:
        merged[FIELD_PAYLOAD] = payload
    return merged
