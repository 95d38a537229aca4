"""Pytest configuration and fixtures for dosekit tests."""

import itertools

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from dosekit.categories.registry import CategoryRegistry, register_all_categories
from dosekit.constants import (
    METADATA_KEY_INSULIN_DELIVERY_REASON,
    SAMPLE_TYPE_INSULIN_DELIVERY,
)
from dosekit.models.quantity import Quantity
from dosekit.models.samples import RawSample, SampleCategory
from dosekit.pipeline.orchestrator import UploadPipeline
from dosekit.types import PipelineConfig

BASE_TIME = datetime(2024, 3, 1, 8, 0, 0, tzinfo=UTC)
TEST_DEVICE_ID = "HealthKit_TestDevice"
TEST_SOURCE_NAME = "com.loopkit.Loop"


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that do not require external dependencies"
    )
    config.addinivalue_line(
        "markers", "business_logic: Tests for classification and validation rules"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests combining multiple components"
    )


class FakeSampleSource:
    """Acquisition collaborator stand-in with a fixed device id and sample types."""

    def __init__(
        self,
        device_id: str = TEST_DEVICE_ID,
        sample_types: dict[SampleCategory, str] | None = None,
    ):
        self.device_id = device_id
        self.sample_types = (
            {SampleCategory.INSULIN: SAMPLE_TYPE_INSULIN_DELIVERY}
            if sample_types is None
            else sample_types
        )

    def sample_type_for(self, category: SampleCategory) -> str | None:
        return self.sample_types.get(category)


@pytest.fixture
def make_sample():
    """Factory for insulin delivery samples.

    Usage:
        sample = make_sample(2.0, reason=1, duration=timedelta(hours=1))
        sample = make_sample(5.5, reason=2)
        sample = make_sample(1.0, reason=None)  # no delivery reason
    """
    counter = itertools.count(1)

    def _make(
        value: float = 1.0,
        reason: Any = 1,
        duration: timedelta = timedelta(0),
        unit: str = "IU",
        start: datetime = BASE_TIME,
        uuid: str | None = "auto",
        extra_metadata: dict[str, Any] | None = None,
        source_name: str | None = TEST_SOURCE_NAME,
        **kwargs: Any,
    ) -> RawSample:
        metadata: dict[str, Any] = {}
        if reason is not None:
            metadata[METADATA_KEY_INSULIN_DELIVERY_REASON] = reason
        metadata.update(extra_metadata or {})
        if uuid == "auto":
            uuid = f"SAMPLE-{next(counter):04d}"
        return RawSample(
            uuid=uuid,
            sample_type=SAMPLE_TYPE_INSULIN_DELIVERY,
            start=start,
            end=start + duration,
            quantity=Quantity(value=value, unit=unit),
            metadata=metadata,
            source_name=source_name,
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_source():
    """Return a source that supplies insulin samples only."""
    return FakeSampleSource()


@pytest.fixture
def registry():
    """Return a fresh registry with the built-in categories."""
    return register_all_categories(CategoryRegistry())


@pytest.fixture
def id_factory():
    """Deterministic identifier source."""
    counter = itertools.count(1)
    return lambda: f"GENERATED-{next(counter):04d}"


@pytest.fixture
def make_pipeline(sample_source, registry, id_factory):
    """Factory for pipelines over the fake source and a fresh registry."""

    def _make(**config_kwargs: Any) -> UploadPipeline:
        return UploadPipeline(
            sample_source,
            registry=registry,
            config=PipelineConfig(**config_kwargs),
            id_factory=id_factory,
        )

    return _make


@pytest.fixture
def make_source():
    """Factory for sources with custom device id or sample types."""
    return FakeSampleSource
