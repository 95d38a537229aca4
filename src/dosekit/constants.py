"""
Constants and mappings for health sample upload preparation.

Metadata keys and delivery-reason codes follow the HealthKit and LoopKit
definitions. Bounds and field names follow the upload service's data model.
"""

from pathlib import Path

# ============================================================================
# Sample Metadata Keys
# ============================================================================

# Insulin delivery reason (HKInsulinDeliveryReason raw value)
METADATA_KEY_INSULIN_DELIVERY_REASON = "HKInsulinDeliveryReason"

# Scheduled basal rate during the time of a basal delivery sample (LoopKit)
METADATA_KEY_SCHEDULED_BASAL_RATE = (
    "com.loopkit.InsulinKit.MetadataKeyScheduledBasalRate"
)

# HKInsulinDeliveryReason raw values
INSULIN_DELIVERY_REASON_BASAL = 1
INSULIN_DELIVERY_REASON_BOLUS = 2

# ============================================================================
# Sample Types
# ============================================================================

SAMPLE_TYPE_INSULIN_DELIVERY = "HKQuantityTypeIdentifierInsulinDelivery"

# ============================================================================
# Units
# ============================================================================

UNIT_INSULIN = "IU"
UNIT_INSULIN_PER_HOUR = "IU/hr"

DIMENSION_INSULIN = "insulin"
DIMENSION_INSULIN_RATE = "insulin_rate"

# unit -> (dimension, factor to the dimension's base unit)
# Base units: IU for amounts, IU/hr for rates
UNIT_TABLE: dict[str, tuple[str, float]] = {
    "IU": (DIMENSION_INSULIN, 1.0),
    "U": (DIMENSION_INSULIN, 1.0),
    "mIU": (DIMENSION_INSULIN, 0.001),
    "IU/hr": (DIMENSION_INSULIN_RATE, 1.0),
    "IU/h": (DIMENSION_INSULIN_RATE, 1.0),
    "U/hr": (DIMENSION_INSULIN_RATE, 1.0),
    "IU/min": (DIMENSION_INSULIN_RATE, 60.0),
    "IU/s": (DIMENSION_INSULIN_RATE, 3600.0),
}

# ============================================================================
# Service Range Constraints
# ============================================================================

class InsulinDeliveryConstants:
    """
    Range constraints enforced by the upload service for insulin records.

    All bounds are inclusive.
    """

    MAX_BASAL_DURATION_MS = 86_400_000  # 24 hours
    MIN_BASAL_RATE = 0.0
    MAX_BASAL_RATE = 100.0  # units/hour; service docs once listed 20.0
    MIN_BOLUS_NORMAL = 0.0
    MAX_BOLUS_NORMAL = 100.0  # units


# ============================================================================
# Upload Record Field Names
# ============================================================================

FIELD_GUID = "guid"
FIELD_DEVICE_ID = "deviceId"
FIELD_TIME = "time"
FIELD_ORIGIN = "origin"
FIELD_PAYLOAD = "payload"

ORIGIN_TYPE_SERVICE = "service"

# ============================================================================
# Default Settings
# ============================================================================

DEFAULT_CONFIG_DIR = Path.home() / ".dosekit"
DEFAULT_CONFIG_FILE = "config.toml"

# Logging configuration
DEFAULT_LOG_DIR = DEFAULT_CONFIG_DIR / "logs"
DEFAULT_LOG_FILE = "dosekit.log"
DEFAULT_LOG_MAX_SIZE_MB = 10
BYTES_PER_MB = 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5

# Time calculations
SECONDS_PER_HOUR = 3600
MILLISECONDS_PER_SECOND = 1000
