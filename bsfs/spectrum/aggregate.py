"""Aggregate classified sites into blockwise SFS entries and matrices."""

from __future__ import annotations

from typing import Hashable, Iterable, Iterator, List, Optional, Sequence, Union

import numpy as np

from ..config import MODES, BSFSConfig
from ..errors import ConfigError, CountOverflowError, ShapeError
from ..logging_ import get_logger
from .classify import Entry, classify_block
from .flatten import Block, flatten_block
from .populations import PopulationOrder, SampleMap

LOGGER = get_logger(__name__)

DTypeLike = Union[str, np.dtype, type]


def _count_dtype(dtype: DTypeLike) -> np.dtype:
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise ConfigError(f"Invalid count dtype {dtype!r}") from exc
    if not np.issubdtype(resolved, np.integer):
        raise ConfigError(f"Count dtype must be an integer type, got {resolved}")
    return resolved


def _accumulate(entries: np.ndarray, shape: Sequence[int], dtype: DTypeLike) -> np.ndarray:
    resolved = _count_dtype(dtype)
    n_sites = entries.shape[0]
    # A cell never holds more than the number of sites in the block.
    if n_sites > np.iinfo(resolved).max:
        raise CountOverflowError(
            f"{n_sites} sites cannot be counted in a {resolved} matrix (max {np.iinfo(resolved).max})"
        )

    size = int(np.prod(shape, dtype=np.int64))
    if n_sites:
        try:
            flat = np.ravel_multi_index(tuple(entries.astype(np.intp).T), tuple(shape))
        except ValueError as exc:
            raise ShapeError(f"entries do not fit a matrix of shape {tuple(shape)}: {exc}") from exc
        counts = np.bincount(flat, minlength=size)
    else:
        counts = np.zeros(size, dtype=np.int64)
    return counts.astype(resolved).reshape(tuple(shape))


def _classify(
    block: Block,
    sample_map: SampleMap,
    population_order: Optional[PopulationOrder],
    strict: bool,
) -> tuple[np.ndarray, PopulationOrder]:
    if population_order is None:
        population_order = PopulationOrder.from_sample_map(sample_map)
    haplotypes = flatten_block(block)
    if haplotypes.shape[0] == 0:
        return np.zeros((0, len(population_order)), dtype=np.int64), population_order

    entries = classify_block(haplotypes, sample_map, population_order, strict=strict)
    LOGGER.debug(
        "Classified %d sites over %d haplotypes into populations %s",
        haplotypes.shape[0],
        haplotypes.shape[1],
        population_order.labels,
    )
    return entries, population_order


def bsfs_indices(
    block: Block,
    sample_map: SampleMap,
    population_order: Optional[PopulationOrder] = None,
    strict: bool = False,
) -> List[Entry]:
    """Return the bSFS entry of every site in ``block``, in site order."""

    entries, _ = _classify(block, sample_map, population_order, strict)
    return [tuple(int(v) for v in row) for row in entries]


def bsfs_matrix(
    block: Block,
    sample_map: SampleMap,
    population_order: Optional[PopulationOrder] = None,
    strict: bool = False,
    dtype: DTypeLike = "int64",
) -> np.ndarray:
    """Count sites per entry into a dense matrix for one block.

    Parameters
    ----------
    block:
        Sites of the block, in any layout :func:`flatten_block` accepts.
    sample_map:
        Haplotype position to population label.
    population_order:
        Axis order of the matrix. Derived from ``sample_map`` when omitted.
    strict:
        Raise on haplotype positions missing from ``sample_map`` instead of
        skipping them.
    dtype:
        Integer dtype of the returned counts.

    Returns
    -------
    np.ndarray
        Array shaped ``population_order.shape`` whose cells sum to the number
        of sites.
    """

    entries, order = _classify(block, sample_map, population_order, strict)
    matrix = _accumulate(entries, order.shape, dtype)
    LOGGER.debug("Built bSFS matrix of shape %s from %d sites", matrix.shape, entries.shape[0])
    return matrix


def entries_to_matrix(
    entries: Iterable[Entry],
    population_order: PopulationOrder,
    dtype: DTypeLike = "int64",
) -> np.ndarray:
    """Fold a list of entries into a bSFS matrix."""

    rows = [tuple(entry) for entry in entries]
    n_pops = len(population_order)
    for idx, row in enumerate(rows):
        if len(row) != n_pops:
            raise ShapeError(f"entry {idx} has {len(row)} coordinates, expected {n_pops}")
        for axis, (value, size) in enumerate(zip(row, population_order.shape)):
            if not isinstance(value, (int, np.integer)) or isinstance(value, (bool, np.bool_)):
                raise ShapeError(f"entry {idx} coordinate {value!r} is not an integer count")
            if not 0 <= value < size:
                raise ShapeError(
                    f"entry {idx} coordinate {value} is out of range for population "
                    f"{population_order.labels[axis]!r} ({size - 1} haplotypes)"
                )

    arr = np.asarray(rows, dtype=np.int64).reshape(len(rows), n_pops)
    return _accumulate(arr, population_order.shape, dtype)


def aggregate(
    block: Block,
    sample_map: SampleMap,
    mode: Optional[str] = None,
    strict: Optional[bool] = None,
    population_order: Optional[PopulationOrder] = None,
    config: Optional[BSFSConfig] = None,
) -> Union[List[Entry], np.ndarray]:
    """Compute the bSFS of a block as an entries list or a count matrix.

    Explicit arguments take precedence over ``config``.
    """

    cfg = config or BSFSConfig()
    mode = mode or cfg.mode
    strict = cfg.strict if strict is None else strict
    if mode not in MODES:
        raise ConfigError(f"Unknown aggregation mode '{mode}', expected one of {MODES}")
    if population_order is None:
        population_order = PopulationOrder.from_sample_map(sample_map, cfg.extra_populations)

    if mode == "indices":
        return bsfs_indices(block, sample_map, population_order, strict=strict)
    return bsfs_matrix(block, sample_map, population_order, strict=strict, dtype=cfg.count_dtype)


def iter_block_matrices(
    blocks: Iterable[Block],
    sample_map: SampleMap,
    population_order: Optional[PopulationOrder] = None,
    strict: bool = False,
    dtype: DTypeLike = "int64",
    extra_populations: Iterable[Hashable] = (),
) -> Iterator[np.ndarray]:
    """Yield one fresh bSFS matrix per block, all sharing one population order."""

    if population_order is None:
        population_order = PopulationOrder.from_sample_map(sample_map, extra_populations)
    for block in blocks:
        yield bsfs_matrix(block, sample_map, population_order, strict=strict, dtype=dtype)


__all__ = [
    "bsfs_indices",
    "bsfs_matrix",
    "entries_to_matrix",
    "aggregate",
    "iter_block_matrices",
]
