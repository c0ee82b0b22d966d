# randlib/attacker/recover.py
# Collect generator outputs (from the oracle or a local generator), build a linear
# system over GF(2), solve for the 128-bit state, then predict the next output.
# Works because rotate_state is linear: every state bit is an XOR of initial bits.

import argparse
import time

import requests

from randlib.lfsr import Random, rotate_state, truncate_output
from randlib.seed import MASK128, SEED_SIZE_BITS, Manual


ORACLE = 'http://127.0.0.1:5000'
BITS = SEED_SIZE_BITS


def build_maps(steps):
    # maps[t][i] is an integer mask (128-bit) telling which bits of the state
    # behind the first observation contribute to bit i of observation t.
    state_coeffs = [1 << i for i in range(BITS)]
    maps = []
    for _ in range(steps):
        maps.append(state_coeffs.copy())
        # advance: shift right by one, top bit = bit0 ^ bit1 ^ bit2 ^ bit7
        feedback = state_coeffs[0] ^ state_coeffs[1] ^ state_coeffs[2] ^ state_coeffs[7]
        state_coeffs = state_coeffs[1:] + [feedback]
    return maps


def construct_equations(observed, output_bits, select='high'):
    # observed: list of integers, each truncated to output_bits bits
    if not 1 <= output_bits <= BITS:
        raise ValueError(f"output_bits must be in 1..{BITS}, got {output_bits}")
    maps = build_maps(len(observed))
    offset = BITS - output_bits if select == 'high' else 0
    rows = []  # integer masks (length 128)
    rhs = []
    seen = {}
    for t, out in enumerate(observed):
        for b in range(output_bits):
            mask = maps[t][b + offset]
            if mask == 0:
                continue
            bit = (out >> b) & 1
            # a shift register shows the same bit many times; keep one copy
            # unless the observations disagree
            if seen.get(mask) == bit:
                continue
            seen[mask] = bit
            rows.append(mask)
            rhs.append(bit)
    return rows, rhs


# Gaussian elimination over GF(2) with integer row masks of <=128 bits
def solve_gf2(rows, rhs):
    rows = rows[:]
    rhs = rhs[:]
    n_eq = len(rows)
    pivot = {}
    row = 0
    for col in reversed(range(BITS)):
        sel = None
        for r in range(row, n_eq):
            if (rows[r] >> col) & 1:
                sel = r
                break
        if sel is None:
            continue
        rows[row], rows[sel] = rows[sel], rows[row]
        rhs[row], rhs[sel] = rhs[sel], rhs[row]
        pivot[col] = row
        for r in range(n_eq):
            if r != row and ((rows[r] >> col) & 1):
                rows[r] ^= rows[row]
                rhs[r] ^= rhs[row]
        row += 1
        if row >= n_eq:
            break
    # under-determined: some state bits are not pinned down
    if len(pivot) < BITS:
        return None
    sol = 0
    for col, r in pivot.items():
        if rhs[r]:
            sol |= (1 << col)
    # inconsistent observations
    for rmask, rval in zip(rows, rhs):
        if bin(rmask & sol).count('1') & 1 != rval:
            return None
    return sol


def recovery_threshold(output_bits):
    """Fewest samples that pin down the state when each reveals `output_bits` bits.

    The first sample exposes output_bits bits and every later rotation shifts
    exactly one unseen bit into the observed window, so 128 bits take
    129 - output_bits samples.
    """
    if not 1 <= output_bits <= BITS:
        raise ValueError(f"output_bits must be in 1..{BITS}, got {output_bits}")
    return BITS + 1 - output_bits


def recover_state(observed, output_bits=BITS, select='high'):
    """
    State that produced observed[0], or None when the observations do not
    determine it (fewer than recovery_threshold(output_bits) samples).
    """
    rows, rhs = construct_equations(observed, output_bits, select)
    return solve_gf2(rows, rhs)


def recover_from_bools(bools):
    # rand_bool() reveals the top bit of each new state
    return recover_state([int(b) for b in bools], output_bits=1, select='high')


def predict_next_from_state(state, steps=1):
    st = state & MASK128
    for _ in range(steps):
        st = rotate_state(st)
    return st


def query_oracle(n, oracle=ORACLE):
    outs = []
    for _ in range(n):
        r = requests.get(oracle + '/get_output', timeout=5)
        r.raise_for_status()
        outs.append(int(r.json()['output'], 16))
    return outs


def validate_candidate(candidate_hex, oracle=ORACLE):
    r = requests.post(oracle + '/validate', json={'candidate': candidate_hex}, timeout=5)
    return r.json()


def observe_local(seed, n, output_bits=BITS, select='high'):
    """Outputs of a local generator, truncated like the oracle does. Returns (outputs, generator)."""
    rng = Random(Manual(seed))
    return [truncate_output(rng.random(), output_bits, select) for _ in range(n)], rng


def output_bits_arg(text):
    bits = int(text)
    if not 1 <= bits <= BITS:
        raise argparse.ArgumentTypeError(f"must be in 1..{BITS}")
    return bits


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--samples', type=int, default=1, help='number of outputs to collect')
    parser.add_argument('--output_bits', type=output_bits_arg, default=BITS, help='bits returned per output (1..128)')
    parser.add_argument('--select', choices=('high', 'low'), default='high', help='which bits are returned')
    parser.add_argument('--oracle', default=None, help='oracle base URL; omit to attack a local generator')
    parser.add_argument('--seed', type=lambda s: int(s, 0), default=42, help='seed of the local generator')
    args = parser.parse_args(argv)

    t0 = time.time()
    hexdigits = (args.output_bits + 3) // 4
    if args.oracle:
        print(f"[attacker] Querying oracle for {args.samples} outputs (output_bits={args.output_bits})...")
        obs = query_oracle(args.samples, args.oracle)
        local = None
    else:
        obs, local = observe_local(args.seed, args.samples, args.output_bits, args.select)
    for i, o in enumerate(obs):
        print(f" obs[{i}]: {format(o, '0{}x'.format(hexdigits))}")

    sol = recover_state(obs, args.output_bits, args.select)
    if sol is None:
        print("[attacker] Failed to find unique solution. Try increasing samples or output_bits.")
        return 1

    print("[attacker] Recovered 128-bit state (hex):")
    print(format(sol, '032x'))
    predicted = predict_next_from_state(sol, steps=len(obs))
    print("[attacker] Predicted next output (full 128-bit hex):")
    print(format(predicted, '032x'))
    cand_hex = format(truncate_output(predicted, args.output_bits, args.select), '0{}x'.format(hexdigits))
    if local is not None:
        actual = truncate_output(local.random(), args.output_bits, args.select)
        print("[attacker] Matches local generator:", format(actual, '0{}x'.format(hexdigits)) == cand_hex)
    else:
        print("[attacker] Validate response:", validate_candidate(cand_hex, args.oracle))
    print(f"[attacker] Done in {time.time() - t0:.2f}s")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
