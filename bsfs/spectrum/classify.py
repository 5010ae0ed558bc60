"""Classify sites into population-stratified derived allele counts."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from ..errors import ConfigError, ShapeError, UnmappedHaplotypeError
from ..logging_ import get_logger
from .populations import PopulationOrder, SampleMap, check_sample_map_keys

LOGGER = get_logger(__name__)

Entry = Tuple[int, ...]


def population_masks(
    sample_map: SampleMap,
    population_order: PopulationOrder,
    n_haplotypes: int,
    strict: bool = False,
    site: Optional[int] = None,
) -> np.ndarray:
    """Boolean matrix shaped (populations, haplotypes) of population membership.

    Unmapped positions belong to no population. With ``strict`` they raise
    :class:`UnmappedHaplotypeError` instead. Map entries past the last
    haplotype always raise :class:`ShapeError`.
    """

    check_sample_map_keys(sample_map)
    axis_of = {label: k for k, label in enumerate(population_order.labels)}
    masks = np.zeros((len(population_order), n_haplotypes), dtype=bool)
    skipped = 0

    for position in range(n_haplotypes):
        label = sample_map.get(position)
        if label is None:
            if strict:
                raise UnmappedHaplotypeError(position, site)
            skipped += 1
            continue
        k = axis_of.get(label)
        if k is None:
            raise ConfigError(
                f"population {label!r} of haplotype {position} is not in {population_order.labels!r}"
            )
        masks[k, position] = True

    beyond = sorted(int(p) for p, label in sample_map.items() if label is not None and p >= n_haplotypes)
    if beyond:
        raise ShapeError(
            f"sample map assigns haplotype {beyond[0]} but sites have {n_haplotypes} haplotypes"
        )
    if skipped:
        LOGGER.debug("Skipped %d unmapped haplotype positions", skipped)
    return masks


def classify(
    flat_haplotypes: np.ndarray,
    sample_map: SampleMap,
    population_order: Optional[PopulationOrder] = None,
    strict: bool = False,
) -> Entry:
    """Count derived (non-zero) calls per population for one flattened site.

    Returns a tuple aligned with ``population_order``; a population without
    haplotypes always scores zero.
    """

    calls = np.asarray(flat_haplotypes)
    if calls.ndim != 1:
        raise ShapeError(f"a flattened site must be 1D, got shape {calls.shape}")
    if population_order is None:
        population_order = PopulationOrder.from_sample_map(sample_map)

    masks = population_masks(sample_map, population_order, calls.shape[0], strict=strict)
    derived = calls != 0
    return tuple(int(n) for n in (masks & derived).sum(axis=1))


def classify_block(
    haplotypes: np.ndarray,
    sample_map: SampleMap,
    population_order: PopulationOrder,
    strict: bool = False,
) -> np.ndarray:
    """Classify every row of a ``(sites, haplotypes)`` array.

    Returns an ``int64`` array shaped ``(sites, populations)`` whose row ``i``
    equals ``classify(haplotypes[i], ...)``.
    """

    if haplotypes.ndim != 2:
        raise ShapeError("haplotypes must be 2D (sites, haplotypes)")

    n_sites, n_haps = haplotypes.shape
    masks = population_masks(
        sample_map, population_order, n_haps, strict=strict, site=0 if n_sites else None
    )
    derived = (haplotypes != 0).astype(np.int64)
    return derived @ masks.T.astype(np.int64)


__all__ = ["Entry", "population_masks", "classify", "classify_block"]
