"""Exceptions raised by randlib."""


class RandlibError(Exception):
    """Base class for all randlib errors."""


class SeedAcquisitionError(RandlibError, OSError):
    """A seed source could not produce a full 128-bit seed."""


class DegenerateSeedError(RandlibError, ValueError):
    """The resolved seed is zero, which the LFSR never leaves."""
