"""
Sample filter functions for the filter stage.

Every filter takes a time-ordered sequence of samples and returns the
samples eligible for upload, in the same order and unmodified.
"""

import logging

from collections.abc import Callable, Iterable, Sequence

from dosekit.models.samples import RawSample

logger = logging.getLogger(__name__)

SampleFilter = Callable[[Sequence[RawSample]], list[RawSample]]


def pass_through(samples: Sequence[RawSample]) -> list[RawSample]:
    """Keep every sample."""
    return list(samples)


def exclude_sources(source_names: Iterable[str]) -> SampleFilter:
    """
    Build a filter that drops samples written by the given sources.

    Args:
        source_names: Source names (e.g., app bundle identifiers) to exclude

    Returns:
        Filter function
    """
    excluded = frozenset(source_names)

    def _filter(samples: Sequence[RawSample]) -> list[RawSample]:
        kept = [s for s in samples if s.source_name not in excluded]
        dropped = len(samples) - len(kept)
        if dropped:
            logger.debug(f"Excluded {dropped} sample(s) from sources {sorted(excluded)}")
        return kept

    return _filter


def drop_duplicate_ids(samples: Sequence[RawSample]) -> list[RawSample]:
    """Keep the first sample for each uuid. Samples without a uuid are kept."""
    seen: set[str] = set()
    kept = []
    for sample in samples:
        if sample.uuid is not None:
            if sample.uuid in seen:
                logger.debug(f"Dropping duplicate sample {sample.uuid}")
                continue
            seen.add(sample.uuid)
        kept.append(sample)
    return kept


def chain_filters(*filters: SampleFilter) -> SampleFilter:
    """Compose filters left to right."""

    def _filter(samples: Sequence[RawSample]) -> list[RawSample]:
        result = list(samples)
        for sample_filter in filters:
            result = sample_filter(result)
        return result

    return _filter
