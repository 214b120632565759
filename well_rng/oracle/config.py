# well_rng/oracle/config.py
# Configuration for the oracle (WELL1024a service)

# Network config
HOST = '127.0.0.1'
PORT = 5000

# Seed configuration:
# - SEED_MODE:
#     'fixed'  : Well1024aRng.from_seed(SEED) (if SEED is None, falls back to DEFAULT_SEED)
#     'random' : all 32 state words from os.urandom (non-deterministic each run)
#     'time'   : current unix time as a 32-bit seed - low entropy (for demo)
SEED_MODE = 'fixed'   # 'fixed' | 'random' | 'time'

# 32-bit seed used when SEED_MODE == 'fixed'.
DEFAULT_SEED = 49152
SEED = 0x1234ABCD  # or None

# If SEED_MODE == 'time', this controls whether we use seconds or milliseconds.
# 's' -> int(time.time()), 'ms' -> int(time.time() * 1000)
TIME_GRANULARITY = 's'  # 's' or 'ms'

# How many bits the oracle reveals on each /get_output call (1..32)
OUTPUT_BITS = 32
OUTPUT_SELECT = 'high'   # 'high' or 'low'

# Expose GET /state and POST /load (snapshot and restore)
ALLOW_STATE_ACCESS = True

# Logging level
LOG_LEVEL = 'INFO'
