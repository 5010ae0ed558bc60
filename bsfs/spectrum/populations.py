"""Canonical population ordering derived from a sample map."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Iterator, Mapping, Tuple

import numpy as np

from ..errors import ConfigError

SampleMap = Mapping[int, Hashable]


def check_sample_map_keys(sample_map: SampleMap) -> None:
    """Raise :class:`ConfigError` unless every key is a non-negative haplotype position."""

    for position in sample_map:
        if not isinstance(position, (int, np.integer)) or isinstance(position, bool) or position < 0:
            raise ConfigError(f"sample map key {position!r} is not a haplotype position")


def n_haps_per_pop(sample_map: SampleMap) -> Dict[Hashable, int]:
    """Count haplotype positions assigned to each population.

    Positions mapped to ``None`` are treated as unassigned and skipped.
    """

    return dict(Counter(label for label in sample_map.values() if label is not None))


@dataclass(frozen=True, slots=True)
class PopulationOrder:
    """Sorted population labels and their haplotype counts.

    This is the axis order of every entry tuple and of the bSFS matrix.
    Build it once per sample map and pass it to every downstream call.
    """

    labels: Tuple[Hashable, ...]
    haplotype_counts: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.haplotype_counts):
            raise ConfigError("labels and haplotype_counts must have the same length")
        if len(set(self.labels)) != len(self.labels):
            raise ConfigError(f"duplicate population labels in {self.labels!r}")
        if any(count < 0 for count in self.haplotype_counts):
            raise ConfigError("haplotype counts must be non-negative")

    @classmethod
    def from_sample_map(
        cls, sample_map: SampleMap, extra_populations: Iterable[Hashable] = ()
    ) -> "PopulationOrder":
        if not sample_map:
            raise ConfigError("sample map is empty; there are no populations to index")
        check_sample_map_keys(sample_map)

        counts = n_haps_per_pop(sample_map)
        labels = set(counts) | set(extra_populations)
        if not labels:
            raise ConfigError("sample map assigns no haplotype to any population")
        try:
            ordered = tuple(sorted(labels))
        except TypeError as exc:
            raise ConfigError(f"population labels cannot be ordered: {exc}") from exc
        return cls(labels=ordered, haplotype_counts=tuple(counts.get(label, 0) for label in ordered))

    @property
    def n_populations(self) -> int:
        return len(self.labels)

    @property
    def total_haplotypes(self) -> int:
        return sum(self.haplotype_counts)

    @property
    def shape(self) -> Tuple[int, ...]:
        """Matrix shape: one more cell than haplotypes along each axis."""

        return tuple(count + 1 for count in self.haplotype_counts)

    def counts(self) -> Dict[Hashable, int]:
        return dict(zip(self.labels, self.haplotype_counts))

    def axis(self, label: Hashable) -> int:
        try:
            return self.labels.index(label)
        except ValueError:
            raise ConfigError(f"population {label!r} is not in {self.labels!r}") from None

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.labels)


def index_populations(
    sample_map: SampleMap, extra_populations: Iterable[Hashable] = ()
) -> Tuple[PopulationOrder, Dict[Hashable, int]]:
    """Return the canonical population order and per-population haplotype counts.

    Parameters
    ----------
    sample_map:
        Haplotype position to population label.
    extra_populations:
        Labels to include even if no haplotype is assigned to them. They get a
        count of zero, i.e. a matrix axis of size one.
    """

    order = PopulationOrder.from_sample_map(sample_map, extra_populations)
    return order, order.counts()


__all__ = ["SampleMap", "PopulationOrder", "check_sample_map_keys", "index_populations", "n_haps_per_pop"]
