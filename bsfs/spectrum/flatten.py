"""Flatten per-individual genotype calls into haplotype vectors."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Union

import numpy as np

from ..errors import ShapeError

Site = Union[np.ndarray, Sequence[Sequence[int]]]
Block = Union[np.ndarray, Sequence[Site]]


def flatten_site(site: Site) -> np.ndarray:
    """Treat every copy of every individual as a haploid sample.

    Calls are concatenated in individual order, then in ploidy order within
    each individual. Individuals may carry different ploidies.
    """

    if isinstance(site, np.ndarray):
        return np.ascontiguousarray(site).reshape(-1)

    parts = [np.atleast_1d(np.asarray(calls, dtype=np.int64)).reshape(-1) for calls in site]
    if not parts:
        return np.empty(0, dtype=np.int64)
    return np.concatenate(parts)


def flatten_block(block: Block) -> np.ndarray:
    """Flatten a block of sites into a ``(sites, haplotypes)`` array.

    Parameters
    ----------
    block:
        Either an array shaped ``(sites, individuals, ploidy)``, an array
        that is already ``(sites, haplotypes)``, or a sequence of sites
        accepted by :func:`flatten_site`.

    Returns
    -------
    np.ndarray
        Two-dimensional array of calls, one row per site.
    """

    if isinstance(block, np.ndarray):
        if block.ndim == 3:
            n_sites, n_individuals, ploidy = block.shape
            return block.reshape(n_sites, n_individuals * ploidy)
        if block.ndim == 2:
            return block
        if block.ndim == 1 and block.size == 0:
            return block.reshape(0, 0).astype(np.int64)
        raise ShapeError(f"block must be a 2D or 3D array, got {block.ndim}D")

    sites: List[np.ndarray] = [flatten_site(site) for site in block]
    if not sites:
        return np.empty((0, 0), dtype=np.int64)
    _check_site_lengths(len(site) for site in sites)
    return np.stack(sites)


def _check_site_lengths(lengths: Iterable[int]) -> None:
    expected = None
    for idx, length in enumerate(lengths):
        if expected is None:
            expected = length
        elif length != expected:
            raise ShapeError(f"site {idx} has {length} haplotypes, expected {expected}")


__all__ = ["Site", "Block", "flatten_site", "flatten_block"]
