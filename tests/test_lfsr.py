"""Generator regression tests: rotation vectors, accessor derivations, rotation counts."""

import numpy as np
import pytest

from randlib import DegenerateSeedError, Manual, Random, rotate_state
from randlib import config
from randlib.lfsr import U32_MAX, U64_MAX

TOP = 1 << 127
SEED_42_STATES = [TOP + 21, (1 << 126) + 10, TOP + (1 << 125) + 5]


def test_rotate_known_vectors():
    assert rotate_state(1) == TOP
    assert rotate_state(TOP) == 1 << 126
    assert rotate_state(42) == TOP + 21


def test_rotate_taps_one_two_seven():
    # bit 7 is a tap
    assert rotate_state(1 << 7) == TOP | (1 << 6)
    # bit 8 is not
    assert rotate_state(1 << 8) == 1 << 7
    # bits 1 and 2 cancel out in the feedback
    assert rotate_state(0b110) == 0b11
    # bit 0 alone feeds the top
    assert rotate_state(0b1) >> 127 == 1


def test_seed_42_walks_expected_states():
    rand = Random(Manual(42))
    assert [rand.random() for _ in range(3)] == SEED_42_STATES


def test_seed_42_first_three_u8():
    rand = Random(Manual(42))
    assert [rand.rand_u8() for _ in range(3)] == [149, 74, 165]
    assert [Random(Manual(42)).rand_u8() for _ in range(3)] == [149, 149, 149]


def test_seed_42_first_i8_and_bool():
    rand = Random(Manual(42))
    assert rand.rand_i8() == 23
    assert rand.state == SEED_42_STATES[1]
    assert Random(Manual(42)).rand_bool() is True


def test_determinism_across_mixed_accessors():
    calls = ["random", "rand_bool", "rand_u8", "rand_i16", "rand_u32", "rand_f32",
             "rand_i128", "rand_u64", "rand_f64", "rand_i64", "rand_u16", "rand_i8", "rand_i32"]
    first = Random(Manual(0xDEADBEEF))
    second = Random(Manual(0xDEADBEEF))
    for _ in range(50):
        for name in calls:
            assert getattr(first, name)() == getattr(second, name)()
    assert first.state == second.state


def test_different_seeds_diverge():
    a = Random(Manual(1))
    b = Random(Manual(2))
    assert [a.random() for _ in range(4)] != [b.random() for _ in range(4)]


@pytest.mark.parametrize("name", [
    "random", "rand_u128", "rand_bool", "rand_u8", "rand_u16", "rand_u32", "rand_u64", "rand_f32", "rand_f64",
])
def test_single_rotation_accessors(name):
    rand = Random(Manual(0x0123456789ABCDEF))
    before = rand.state
    getattr(rand, name)()
    assert rand.state == rotate_state(before)


@pytest.mark.parametrize("name", ["rand_i8", "rand_i16", "rand_i32", "rand_i64", "rand_i128"])
def test_signed_accessors_rotate_twice(name):
    rand = Random(Manual(0x0123456789ABCDEF))
    before = rand.state
    getattr(rand, name)()
    assert rand.state == rotate_state(rotate_state(before))


@pytest.mark.parametrize("bits", [8, 16, 32, 64])
def test_unsigned_uses_max_as_modulus(bits):
    raw = Random(Manual(99))
    derived = Random(Manual(99))
    for _ in range(200):
        assert getattr(derived, f"rand_u{bits}")() == raw.random() % ((1 << bits) - 1)


@pytest.mark.parametrize("bits", [8, 16, 32, 64, 128])
def test_signed_magnitude_and_sign(bits):
    raw = Random(Manual(7777))
    derived = Random(Manual(7777))
    for _ in range(200):
        magnitude = raw.random() % ((1 << (bits - 1)) - 1)
        negative = raw.rand_bool()
        assert getattr(derived, f"rand_i{bits}")() == (-magnitude if negative else magnitude)


@pytest.mark.parametrize("bits", [8, 16, 32, 64])
def test_unsigned_range_never_reaches_max(bits):
    rand = Random(Manual(0xC0FFEE))
    samples = [getattr(rand, f"rand_u{bits}")() for _ in range(10_000)]
    assert min(samples) >= 0
    assert max(samples) <= (1 << bits) - 2


@pytest.mark.parametrize("bits", [8, 16, 32, 64])
def test_signed_range(bits):
    rand = Random(Manual(0xBADC0DE))
    limit = (1 << (bits - 1)) - 2
    samples = [getattr(rand, f"rand_i{bits}")() for _ in range(2_000)]
    assert all(-limit <= n <= limit for n in samples)
    assert any(n < 0 for n in samples) and any(n > 0 for n in samples)


@pytest.mark.parametrize("name", ["rand_f32", "rand_f64"])
def test_float_range(name):
    rand = Random(Manual(0xF10A7))
    samples = [getattr(rand, name)() for _ in range(10_000)]
    assert all(isinstance(x, float) for x in samples)
    assert all(0.0 <= x <= 1.0 for x in samples)


def test_float_derivations_use_matching_width():
    raw = Random(Manual(31337))
    derived = Random(Manual(31337))
    u32 = raw.rand_u32()
    assert derived.rand_f32() == float(np.float32(u32) / np.float32(U32_MAX))
    u64 = raw.rand_u64()
    assert derived.rand_f64() == float(u64) / float(U64_MAX)


def test_rand_bool_is_top_bit():
    raw = Random(Manual(555))
    derived = Random(Manual(555))
    for _ in range(500):
        assert derived.rand_bool() == bool(raw.random() >> 127)


def test_peek_does_not_advance():
    rand = Random(Manual(42))
    assert rand.peek() == SEED_42_STATES[0]
    assert rand.state == 42
    assert rand.random() == SEED_42_STATES[0]


def test_zero_seed_rejected_by_default():
    with pytest.raises(DegenerateSeedError):
        Random(Manual(0))


def test_zero_seed_is_fixed_point_when_allowed(monkeypatch):
    rand = Random(Manual(0), reject_degenerate=False)
    assert [rand.random() for _ in range(10)] == [0] * 10
    assert rand.rand_bool() is False

    monkeypatch.setattr(config, "REJECT_ZERO_SEED", False)
    assert Random(Manual(0)).rand_u64() == 0


@pytest.mark.parametrize("seed", [1, 42, 1 << 127, (1 << 128) - 1, 0x8000000000000001, 0xDEADBEEF << 64])
def test_nonzero_seed_never_reaches_zero(seed):
    state = seed
    for _ in range(3_000):
        state = rotate_state(state)
        assert state != 0


def test_manual_seed_must_fit_128_bits():
    Manual((1 << 128) - 1)
    with pytest.raises(ValueError):
        Manual(1 << 128)
    with pytest.raises(ValueError):
        Manual(-1)


@pytest.mark.parametrize("value", [1.5, "42", True, None])
def test_manual_seed_must_be_an_int(value):
    with pytest.raises(TypeError):
        Manual(value)
