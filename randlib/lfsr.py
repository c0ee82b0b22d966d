# randlib/lfsr.py
# 128-bit LFSR generator.
# State: single 128-bit integer.
# Update: shift right by one, new top bit = XOR of taps 0, 1, 2 and 7 (linear over GF(2)).
# NOT cryptographically secure: see randlib.attacker.recover.

import logging
from typing import Optional

import numpy as np

from . import config
from .errors import DegenerateSeedError
from .seed import MASK128, SEED_SIZE_BITS, SeedSource, resolve_seed

logger = logging.getLogger(__name__)

U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1


def rotate_state(s: int) -> int:
    """Advance a bare 128-bit state by one LFSR step."""
    feedback = s ^ (s >> 1) ^ (s >> 2) ^ (s >> 7)
    newbit = feedback & 1
    return ((s >> 1) | (newbit << (SEED_SIZE_BITS - 1))) & MASK128


class Random:
    """
    A random number generator.

    Notes:
      1. Unsigned number generation is cheaper: one rotation per call.
      2. Signed accessors rotate the seed twice. The first rotation produces
         the magnitude, the second one a random boolean that decides whether
         the number is negated.
      3. Several generators can live in one program. Give them different seeds
         or they will produce the same numbers.
      4. A Random is not thread-safe; serialise access or use one per worker.
    """

    def __init__(self, source: SeedSource, reject_degenerate: Optional[bool] = None):
        if reject_degenerate is None:
            reject_degenerate = config.REJECT_ZERO_SEED
        seed = resolve_seed(source)
        # zero is a fixed point of rotate_state: the generator would only ever return 0
        if seed == 0:
            if reject_degenerate:
                raise DegenerateSeedError("an all-zero seed never changes under rotation")
            logger.warning("Seeded with zero: every sample will be 0")
        self._seed = seed

    @property
    def state(self) -> int:
        """Current seed (the most recent rotation result)."""
        return self._seed

    def rotate(self) -> None:
        self._seed = rotate_state(self._seed)

    def peek(self) -> int:
        # next state without consuming it
        return rotate_state(self._seed)

    def random(self) -> int:
        """Rotate the seed and return it."""
        self.rotate()
        return self._seed

    def rand_u128(self) -> int:
        return self.random()

    def rand_bool(self) -> bool:
        return ((self.random() >> (SEED_SIZE_BITS - 1)) & 1) == 1

    # The modulus is the type's MAX (2**N - 1), not 2**N, so MAX itself is
    # never returned and low values are slightly favoured. Kept as-is: changing
    # it changes every derived sequence.
    def _unsigned(self, bits: int) -> int:
        return self.random() % ((1 << bits) - 1)

    def _signed(self, bits: int) -> int:
        n = self.random() % ((1 << (bits - 1)) - 1)
        if self.rand_bool():
            n = -n
        return n

    def rand_u8(self) -> int:
        return self._unsigned(8)

    def rand_u16(self) -> int:
        return self._unsigned(16)

    def rand_u32(self) -> int:
        return self._unsigned(32)

    def rand_u64(self) -> int:
        return self._unsigned(64)

    def rand_i8(self) -> int:
        return self._signed(8)

    def rand_i16(self) -> int:
        return self._signed(16)

    def rand_i32(self) -> int:
        return self._signed(32)

    def rand_i64(self) -> int:
        return self._signed(64)

    def rand_i128(self) -> int:
        return self._signed(128)

    def rand_f32(self) -> float:
        """Random single-precision float in [0.0, 1.0]."""
        return float(np.float32(self.rand_u32()) / np.float32(U32_MAX))

    def rand_f64(self) -> float:
        """Random double-precision float in [0.0, 1.0]."""
        return float(self.rand_u64()) / float(U64_MAX)


def truncate_output(x: int, bits: int, select: str = 'high') -> int:
    """Keep `bits` bits of a 128-bit sample, from the top ('high') or bottom ('low')."""
    if bits >= SEED_SIZE_BITS:
        return x & MASK128
    if select == 'high':
        return (x >> (SEED_SIZE_BITS - bits)) & ((1 << bits) - 1)
    return x & ((1 << bits) - 1)
