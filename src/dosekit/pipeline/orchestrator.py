"""
Upload preparation pipeline.

Drives one category batch end to end:

    filter -> per sample: classify -> transform -> common fields -> metadata

Each sample is handled independently. A sample that fails any step is
dropped from the output and recorded in the report with its reason; the
rest of the batch is unaffected. Output records keep the input order.
"""

import logging

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Protocol

from dosekit.categories.base import CategoryHandler
from dosekit.categories.filters import chain_filters, drop_duplicate_ids, exclude_sources
from dosekit.categories.registry import CategoryRegistry, register_all_categories
from dosekit.errors import (
    DiscardReason,
    IncompatibleUnitError,
    PipelineError,
    SampleDiscarded,
    UnsupportedCategoryError,
)
from dosekit.merge.common import IdFactory, add_common_fields, generate_guid
from dosekit.merge.metadata import add_metadata, residual_metadata
from dosekit.models.samples import RawSample, SampleCategory
from dosekit.pipeline.report import DiscardedSample, TransformReport
from dosekit.types import PipelineConfig

logger = logging.getLogger(__name__)

DiscardReporter = Callable[[DiscardedSample], None]


class SampleSource(Protocol):
    """The acquisition collaborator, as seen by the pipeline."""

    @property
    def device_id(self) -> str: ...

    def sample_type_for(self, category: SampleCategory) -> str | None:
        """Source sample type identifier for a category, or None if unavailable."""
        ...


@dataclass
class TransformResult:
    """Upload-ready records for a batch plus the batch report."""

    records: list[dict[str, Any]]
    report: TransformReport


class UploadPipeline:
    """Turns raw samples into upload-ready records, one category batch at a time."""

    def __init__(
        self,
        source: SampleSource,
        registry: CategoryRegistry | None = None,
        config: PipelineConfig | None = None,
        id_factory: IdFactory = generate_guid,
        on_discard: DiscardReporter | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            source: Acquisition collaborator supplying device id and sample types
            registry: Category handlers (default: global registry with built-ins)
            config: Pipeline settings (default: PipelineConfig())
            id_factory: Identifier source for samples without a uuid
            on_discard: Called with each discarded sample as it is recorded
        """
        self.source = source
        self.registry = registry if registry is not None else register_all_categories()
        self.config = config or PipelineConfig()
        self.id_factory = id_factory
        self.on_discard = on_discard

    @classmethod
    def from_config(cls, source: SampleSource, **kwargs: Any) -> "UploadPipeline":
        """Create a pipeline using settings from the user config file."""
        from dosekit.config import load_pipeline_config

        return cls(source, config=load_pipeline_config(), **kwargs)

    def resolve_handler(self, category: SampleCategory) -> CategoryHandler:
        """
        Find the handler for a category the source can supply.

        Raises:
            UnsupportedCategoryError: If the source has no sample type for the
                category, no handler is registered, or the types disagree
        """
        sample_type = self.source.sample_type_for(category)
        if sample_type is None:
            raise UnsupportedCategoryError(
                category.value,
                f"Source cannot supply samples for category '{category.value}'",
            )

        handler = self.registry.get(category)
        if handler.sample_type != sample_type:
            raise UnsupportedCategoryError(
                category.value,
                f"Source sample type '{sample_type}' does not match "
                f"handler type '{handler.sample_type}'",
            )
        return handler

    def filter_samples(
        self, handler: CategoryHandler, samples: Sequence[RawSample]
    ) -> list[tuple[int, RawSample]]:
        """
        Apply the category filter followed by any configured filters.

        Returns:
            Eligible samples paired with their position in the input sequence

        Raises:
            PipelineError: If a filter returns a sample that is not in its input
        """
        filters = [handler.filter_samples]
        if self.config.excluded_sources:
            filters.append(exclude_sources(self.config.excluded_sources))
        if self.config.drop_duplicate_ids:
            filters.append(drop_duplicate_ids)
        kept = chain_filters(*filters)(samples)

        # Filters return an order-preserving subsequence of the input objects
        indexed: list[tuple[int, RawSample]] = []
        position = 0
        for sample in kept:
            while position < len(samples) and samples[position] is not sample:
                position += 1
            if position == len(samples):
                raise PipelineError(
                    f"Filter for {handler} returned a sample not in its input"
                )
            indexed.append((position, sample))
            position += 1
        return indexed

    def transform_sample(
        self, handler: CategoryHandler, sample: RawSample
    ) -> dict[str, Any]:
        """
        Build one upload record.

        Raises:
            SampleDiscarded: If the sample fails classification or validation
            IncompatibleUnitError: If the sample quantity has the wrong unit
        """
        record = handler.transform(sample)
        record = add_common_fields(
            record, sample, self.source.device_id, id_factory=self.id_factory
        )

        metadata = sample.metadata
        if self.config.strip_consumed_metadata:
            metadata = residual_metadata(metadata, handler.consumed_metadata_keys)
        return add_metadata(record, metadata)

    def _process(
        self, handler: CategoryHandler, index: int, sample: RawSample
    ) -> dict[str, Any] | DiscardedSample:
        try:
            return self.transform_sample(handler, sample)
        except SampleDiscarded as e:
            reason, detail = e.reason, str(e)
        except IncompatibleUnitError as e:
            reason, detail = DiscardReason.INCOMPATIBLE_UNIT, str(e)
        except Exception as e:
            logger.error(f"Failed to transform sample {sample.uuid}: {e}", exc_info=True)
            reason, detail = DiscardReason.UNEXPECTED_ERROR, f"{type(e).__name__}: {e}"

        return DiscardedSample(
            index=index, sample_id=sample.uuid, reason=reason, detail=detail
        )

    def _process_all(
        self, handler: CategoryHandler, samples: list[tuple[int, RawSample]]
    ) -> list[dict[str, Any] | DiscardedSample]:
        workers = self.config.max_workers
        if workers <= 1 or len(samples) <= 1:
            return [self._process(handler, i, s) for i, s in samples]

        def _run(indexed: tuple[int, RawSample]) -> dict[str, Any] | DiscardedSample:
            return self._process(handler, *indexed)

        # Executor.map yields results in submission order
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(_run, samples))

    def _report_discard(self, discard: DiscardedSample) -> None:
        if self.on_discard is None:
            return
        try:
            self.on_discard(discard)
        except Exception as e:
            logger.error(
                f"Discard reporter failed for sample {discard.sample_id}: {e}",
                exc_info=True,
            )

    def prepare(
        self, category: SampleCategory, samples: Sequence[RawSample]
    ) -> TransformResult:
        """
        Prepare a batch of samples for upload.

        Args:
            category: Category of every sample in the batch
            samples: Time-ordered raw samples

        Returns:
            TransformResult with records in input order and the batch report

        Raises:
            UnsupportedCategoryError: If the category cannot be prepared at all
        """
        handler = self.resolve_handler(category)
        eligible = self.filter_samples(handler, samples)
        logger.info(
            f"Preparing {len(eligible)} of {len(samples)} {category.value} sample(s)"
        )

        records: list[dict[str, Any]] = []
        discards: list[DiscardedSample] = []

        for outcome in self._process_all(handler, eligible):
            if isinstance(outcome, DiscardedSample):
                logger.warning(
                    f"Skipping {category.value} sample {outcome.sample_id} "
                    f"({outcome.reason.value}): {outcome.detail}"
                )
                discards.append(outcome)
                self._report_discard(outcome)
            else:
                records.append(outcome)

        report = TransformReport(
            category=category.value,
            total_samples=len(samples),
            filtered_out=len(samples) - len(eligible),
            emitted=len(records),
            discards=discards,
        )
        logger.info(
            f"Prepared {report.emitted} {category.value} record(s), "
            f"discarded {report.discarded}"
        )
        return TransformResult(records=records, report=report)
