"""Blockwise site frequency spectra from genotype calls."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .config import BSFSConfig, load_yaml_config
from .errors import BSFSError, ConfigError, CountOverflowError, ShapeError, UnmappedHaplotypeError
from .spectrum import (
    PopulationOrder,
    aggregate,
    bsfs_indices,
    bsfs_matrix,
    classify,
    classify_block,
    entries_to_matrix,
    flatten_block,
    flatten_site,
    index_populations,
    iter_block_matrices,
    n_haps_per_pop,
)

try:  # pragma: no cover - best effort metadata lookup
    __version__ = version("bsfs")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "BSFSConfig",
    "load_yaml_config",
    "BSFSError",
    "ConfigError",
    "ShapeError",
    "UnmappedHaplotypeError",
    "CountOverflowError",
    "PopulationOrder",
    "flatten_site",
    "flatten_block",
    "index_populations",
    "n_haps_per_pop",
    "classify",
    "classify_block",
    "bsfs_indices",
    "bsfs_matrix",
    "entries_to_matrix",
    "aggregate",
    "iter_block_matrices",
]
