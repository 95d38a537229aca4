"""Field mergers applied to every record after type-specific transformation."""

from dosekit.merge.common import add_common_fields, format_time, generate_guid
from dosekit.merge.metadata import add_metadata, residual_metadata

__all__ = [
    "add_common_fields",
    "add_metadata",
    "format_time",
    "generate_guid",
    "residual_metadata",
]
