"""Exceptions raised while building blockwise frequency spectra."""

from __future__ import annotations

from typing import Optional


class BSFSError(Exception):
    """Base class for all errors raised by :mod:`bsfs`."""


class ConfigError(BSFSError, ValueError):
    """The sample map, population order or configuration is unusable."""


class ShapeError(BSFSError, ValueError):
    """Genotype calls do not have the structure the sample map implies."""


class UnmappedHaplotypeError(BSFSError, IndexError):
    """A haplotype position has no population in the sample map."""

    def __init__(self, position: int, site: Optional[int] = None) -> None:
        self.position = position
        self.site = site
        where = f" at site {site}" if site is not None else ""
        super().__init__(f"haplotype {position}{where} has no entry in the sample map")


class CountOverflowError(BSFSError, OverflowError):
    """A matrix cell count cannot be represented by the requested dtype."""


__all__ = [
    "BSFSError",
    "ConfigError",
    "ShapeError",
    "UnmappedHaplotypeError",
    "CountOverflowError",
]
