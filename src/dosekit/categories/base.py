"""
Category Handler Definition

Each sample category is described by one CategoryHandler value: which
source sample type it reads, how it pre-filters samples, how it classifies
a sample into a record kind, and which transformer builds the type-specific
fields for each kind. The pipeline dispatches on these values instead of on
subclass overrides, so adding a category means registering a new handler.

Usage Example:
    handler = CategoryHandler(
        category=SampleCategory.INSULIN,
        sample_type="HKQuantityTypeIdentifierInsulinDelivery",
        filter_samples=pass_through,
        classify=classify_delivery_reason,
        transformers={
            DeliveryReason.BASAL: transform_basal,
            DeliveryReason.BOLUS: transform_bolus,
        },
        consumed_metadata_keys=frozenset({...}),
    )
"""

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any

from dosekit.categories.filters import SampleFilter
from dosekit.models.samples import RawSample, SampleCategory

Classifier = Callable[[RawSample], Hashable]
SampleTransformer = Callable[[RawSample], dict[str, Any]]


@dataclass(frozen=True)
class CategoryHandler:
    """Filter, classify and transform functions for one sample category."""

    category: SampleCategory
    sample_type: str
    filter_samples: SampleFilter
    classify: Classifier
    transformers: Mapping[Hashable, SampleTransformer]
    consumed_metadata_keys: frozenset[str] = field(default_factory=frozenset)

    def transform(self, sample: RawSample) -> dict[str, Any]:
        """
        Classify a sample and build its type-specific record fields.

        Raises:
            SampleDiscarded: If classification or validation fails
        """
        kind = self.classify(sample)
        return self.transformers[kind](sample)

    def __str__(self) -> str:
        return f"{self.category.value} ({self.sample_type})"
