"""Router constants.

Centralizes the pricing parameters and well-known sentinel values.
"""

from amm_router.safe_int import UINT256_MAX

# Constant-product fee: inputs are scaled by 997/1000 (0.3% fee)
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# "Authorize up to this ceiling" - an allowance at this value is never decremented
MAX_UINT256 = UINT256_MAX

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Pools never forward anything in the swap callback payload
EMPTY_SWAP_DATA = b""
