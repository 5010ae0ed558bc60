"""Haplotype flattening, site classification and block aggregation."""

from .aggregate import aggregate, bsfs_indices, bsfs_matrix, entries_to_matrix, iter_block_matrices
from .classify import classify, classify_block, population_masks
from .flatten import flatten_block, flatten_site
from .populations import PopulationOrder, index_populations, n_haps_per_pop

__all__ = [
    "flatten_site",
    "flatten_block",
    "PopulationOrder",
    "index_populations",
    "n_haps_per_pop",
    "classify",
    "classify_block",
    "population_masks",
    "bsfs_indices",
    "bsfs_matrix",
    "entries_to_matrix",
    "aggregate",
    "iter_block_matrices",
]
