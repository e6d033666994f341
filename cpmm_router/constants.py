"""Protocol constants for constant product routing.

Centralizes fee arithmetic and search defaults so no magic numbers
are scattered through the swap math or the router.
"""

# Fees are expressed in basis points of the input amount
BPS_DENOMINATOR = 10_000

# Fee taken from the input before the constant product formula is applied.
# 0 keeps quotes on the bare x * y = k curve; classic UniswapV2 pools use 30.
DEFAULT_FEE_BPS = 0

# Maximum number of swaps in a single route. None bounds paths only by the
# number of distinct tokens (simple-path constraint).
DEFAULT_MAX_HOPS: int | None = None

# Number of chunks the split router divides the input into
DEFAULT_SPLIT_PARTS = 4

# Prefix for identifiers assigned to pool records that carry no address
ANONYMOUS_POOL_PREFIX = "pool-"
