# randlib/__main__.py
# Demo: print raw samples and one value from each typed accessor.
#
# usage:
#     python -m randlib --source time --count 10
#     python -m randlib --source manual --seed 42

import argparse
import logging
import sys

from . import config
from .errors import RandlibError
from .lfsr import Random
from .seed import DEVICE_NAMES, Device, LegacyRand, Manual, SystemTime

ACCESSORS = ('i128', 'i64', 'i32', 'i16', 'i8', 'u64', 'u32', 'u16', 'u8', 'bool', 'f32', 'f64')


def build_source(name, seed):
    if name == 'manual':
        return Manual(seed)
    if name == 'time':
        return SystemTime()
    if name == 'crand':
        return LegacyRand()
    return Device(name)


def main(argv=None):
    parser = argparse.ArgumentParser(prog='randlib', description='Sample the LFSR generator')
    parser.add_argument('--source', default='time', choices=('manual', 'time', 'crand') + DEVICE_NAMES,
                        help='where the seed comes from')
    parser.add_argument('--seed', type=lambda s: int(s, 0), default=42, help='seed for --source manual')
    parser.add_argument('--count', type=int, default=10, help='number of raw 128-bit samples')
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))

    try:
        rand = Random(build_source(args.source, args.seed))
    except (RandlibError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for _ in range(args.count):
        print(rand.random())
    for kind in ACCESSORS:
        print(f"{kind}: {getattr(rand, 'rand_' + kind)()}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
