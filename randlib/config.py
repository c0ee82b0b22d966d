# randlib/config.py
# Configuration for the generator, the oracle service and the seed sources

# Network config (oracle service)
HOST = '127.0.0.1'
PORT = 5000

# Seed configuration:
# - SEED_MODE:
#     'fixed'   : use the integer in SEED (if SEED is None, falls back to a deterministic constant)
#     'time'    : current unix time in whole seconds - low entropy
#     'crand'   : libc rand() - fixed default seed unless srand() was called elsewhere
#     'urandom' : 16 bytes from DEVICE_DIR/urandom
#     'random'  : 16 bytes from DEVICE_DIR/random (may block on old kernels)
SEED_MODE = 'fixed'   # 'fixed' | 'time' | 'crand' | 'urandom' | 'random'

# If SEED_MODE == 'fixed', use this SEED (128-bit integer).
# If None, a default deterministic 128-bit constant will be used.
SEED = 0x1234567890ABCDEF1234567890ABCDEF  # or None

# Seed sources this build exposes. Sources missing here, or missing on the
# host (no loadable libc, no device file), are absent from available_sources().
ENABLED_SOURCES = ('manual', 'time', 'crand', 'urandom', 'random')

# Directory holding the entropy device files
DEVICE_DIR = '/dev'

# An all-zero seed is a fixed point of the LFSR. Reject it at construction.
REJECT_ZERO_SEED = True

# How many bits the oracle reveals on each /get_output call (1..128)
OUTPUT_BITS = 128
OUTPUT_SELECT = 'high'   # 'high' or 'low'

# Logging level
LOG_LEVEL = 'INFO'
