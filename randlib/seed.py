# randlib/seed.py
# Seed sources for the LFSR generator.
# A source is a one-shot descriptor: it is resolved to a 128-bit integer once,
# when a Random is constructed, and never consulted again.

import ctypes
import ctypes.util
import logging
import os
import sys
import time
from dataclasses import dataclass
from functools import partial
from typing import List, Optional, Union

from . import config
from .errors import SeedAcquisitionError

logger = logging.getLogger(__name__)

# Size of a seed in bytes and bits
SEED_SIZE = 16
SEED_SIZE_BITS = SEED_SIZE * 8
MASK128 = (1 << SEED_SIZE_BITS) - 1

# Used when SEED_MODE is 'fixed' and no SEED is configured
DEFAULT_SEED = 0x1234567890ABCDEF1234567890ABCDEF

DEVICE_NAMES = ('urandom', 'random')

# Fixed order of every tag this module knows about
SOURCE_TAGS = ('manual', 'time', 'crand') + DEVICE_NAMES


@dataclass(frozen=True)
class Manual:
    """A seed supplied by the caller."""

    value: int
    tag = 'manual'

    def __post_init__(self):
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"manual seed must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= MASK128:
            raise ValueError(f"manual seed must fit in {SEED_SIZE_BITS} unsigned bits, got {self.value}")


@dataclass(frozen=True)
class SystemTime:
    """Current unix time in whole seconds."""

    tag = 'time'


@dataclass(frozen=True)
class LegacyRand:
    """The C library's rand().

    Warning: libc seeds rand() with a constant unless srand() is called, so
    separate runs of a process usually get the same seed from this source.
    """

    tag = 'crand'


@dataclass(frozen=True)
class Device:
    """Bytes read from an entropy device file ('urandom' or 'random').

    Only works on *nix hosts that provide /dev/urandom and /dev/random.
    """

    name: str = 'urandom'

    def __post_init__(self):
        if self.name not in DEVICE_NAMES:
            raise ValueError(f"unknown entropy device {self.name!r}, expected one of {DEVICE_NAMES}")

    @property
    def tag(self):
        return self.name


SeedSource = Union[Manual, SystemTime, LegacyRand, Device]


_LIBC = None
_LIBC_PROBED = False


def _load_libc():
    """Load the C library once; None when the host has no loadable libc."""
    global _LIBC, _LIBC_PROBED
    if not _LIBC_PROBED:
        _LIBC_PROBED = True
        name = ctypes.util.find_library('c') or ctypes.util.find_library('msvcrt')
        try:
            _LIBC = ctypes.CDLL(name)
        except (OSError, TypeError) as exc:
            logger.debug(f"libc not loadable, 'crand' seed source disabled: {exc}")
            _LIBC = None
    return _LIBC


def device_path(name: str) -> str:
    return os.path.join(config.DEVICE_DIR, name)


def available_sources() -> List[str]:
    """
    Tags of the seed sources usable on this host with this configuration.
    'manual' is always present; the others need to be listed in
    config.ENABLED_SOURCES and backed by the host (libc for 'crand', the
    device file for 'urandom'/'random').
    """
    enabled = set(config.ENABLED_SOURCES) | {'manual'}
    tags = []
    for tag in SOURCE_TAGS:
        if tag not in enabled:
            continue
        if tag == 'crand' and _load_libc() is None:
            continue
        if tag in DEVICE_NAMES and not os.path.exists(device_path(tag)):
            continue
        tags.append(tag)
    return tags


def _system_time_seed() -> int:
    return abs(int(time.time())) & MASK128


def _crand_seed() -> int:
    libc = _load_libc()
    if libc is None:
        raise SeedAcquisitionError("libc rand() is not available on this host")
    return abs(libc.rand()) & MASK128


def _device_seed(name: str) -> int:
    path = device_path(name)
    buf = bytearray()
    try:
        with open(path, 'rb', buffering=0) as f:
            while len(buf) < SEED_SIZE:
                chunk = f.read(SEED_SIZE - len(buf))
                if not chunk:
                    break
                buf.extend(chunk)
    except OSError as exc:
        raise SeedAcquisitionError(f"cannot read seed from {path}: {exc}") from exc
    if len(buf) < SEED_SIZE:
        raise SeedAcquisitionError(f"short read from {path}: got {len(buf)} of {SEED_SIZE} bytes")
    # native order: the seed never leaves the process
    return int.from_bytes(bytes(buf), sys.byteorder)


def resolve_seed(source: SeedSource) -> int:
    """Turn a seed source into a 128-bit unsigned integer."""
    if isinstance(source, Manual):
        return source.value
    if isinstance(source, SystemTime):
        acquire = _system_time_seed
    elif isinstance(source, LegacyRand):
        acquire = _crand_seed
    elif isinstance(source, Device):
        acquire = partial(_device_seed, source.name)
    else:
        raise TypeError(f"not a seed source: {source!r}")
    if source.tag not in available_sources():
        raise SeedAcquisitionError(f"seed source {source.tag!r} is not available")
    seed = acquire()
    logger.debug(f"Resolved {source.tag} seed: {seed:032x}")
    return seed


def source_from_config(mode: Optional[str] = None) -> SeedSource:
    """
    Build a seed source according to config.SEED_MODE.
      - 'fixed'            -> Manual(config.SEED), or Manual(DEFAULT_SEED) if SEED is None
      - 'time'             -> SystemTime()
      - 'crand'            -> LegacyRand()
      - 'urandom'/'random' -> Device(mode)
    Unknown modes fall back to the deterministic default seed.
    """
    mode = (mode or config.SEED_MODE or 'fixed').lower()
    if mode == 'fixed':
        if config.SEED is not None:
            logger.info(f"Using fixed SEED from config: {int(config.SEED) & MASK128:032x}")
            return Manual(int(config.SEED) & MASK128)
        logger.info(f"Using default fixed SEED: {DEFAULT_SEED:032x}")
        return Manual(DEFAULT_SEED)
    if mode == 'time':
        return SystemTime()
    if mode == 'crand':
        return LegacyRand()
    if mode in DEVICE_NAMES:
        return Device(mode)
    logger.warning(f"Unknown SEED_MODE '{mode}', falling back to default SEED: {DEFAULT_SEED:032x}")
    return Manual(DEFAULT_SEED)
