"""A simple LFSR-based random number generator.

    >>> from randlib import Random, Manual
    >>> rand = Random(Manual(42))
    >>> rand.rand_u8()
    149

Not suitable for anything security related.
"""

from .errors import DegenerateSeedError, RandlibError, SeedAcquisitionError
from .lfsr import Random, rotate_state
from .seed import (
    Device,
    LegacyRand,
    Manual,
    SeedSource,
    SystemTime,
    available_sources,
    resolve_seed,
    source_from_config,
)

__all__ = [
    "DegenerateSeedError",
    "Device",
    "LegacyRand",
    "Manual",
    "Random",
    "RandlibError",
    "SeedAcquisitionError",
    "SeedSource",
    "SystemTime",
    "available_sources",
    "resolve_seed",
    "rotate_state",
    "source_from_config",
]
