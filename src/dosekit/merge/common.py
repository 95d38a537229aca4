"""
Common record fields: guid, deviceId, time and origin.

Added to every record regardless of type. Keys already present on the
record are never overwritten, so merging twice is a no-op.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from dosekit.constants import (
    FIELD_DEVICE_ID,
    FIELD_GUID,
    FIELD_ORIGIN,
    FIELD_TIME,
    ORIGIN_TYPE_SERVICE,
)
from dosekit.models.records import Origin
from dosekit.models.samples import RawSample

IdFactory = Callable[[], str]


def generate_guid() -> str:
    """Generate a random record identifier."""
    return str(uuid4()).upper()


def format_time(moment: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with milliseconds.

    Naive datetimes are taken to be UTC.

    Example:
        2024-03-01T08:00:00.000Z
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    utc = moment.astimezone(UTC)
    return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"


def add_common_fields(
    record: dict[str, Any],
    sample: RawSample,
    device_id: str,
    id_factory: IdFactory = generate_guid,
) -> dict[str, Any]:
    """
    Return a copy of the record with the common fields filled in.

    Args:
        record: Record with type-specific fields
        sample: Sample the record was built from
        device_id: Identifier of the uploading device
        id_factory: Source of new identifiers when the sample carries none

    Returns:
        New record dict
    """
    merged = dict(record)
    guid = merged.get(FIELD_GUID) or sample.uuid or id_factory()

    merged.setdefault(FIELD_GUID, guid)
    merged.setdefault(FIELD_DEVICE_ID, device_id)
    merged.setdefault(FIELD_TIME, format_time(sample.start))
    merged.setdefault(
        FIELD_ORIGIN,
        Origin(
            id=guid,
            name=sample.source_name,
            version=sample.source_version,
            type=ORIGIN_TYPE_SERVICE,
        ).to_record(),
    )
    return merged
