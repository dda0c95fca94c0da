"""Constants for deterministic EVM transaction construction."""

from enum import Enum

DECIMAL_PRECISION = 64

PRIVATE_KEY_LENGTH = 32
SELECTOR_LENGTH = 4

TOKEN_TRANSFER_SIGNATURE = "transfer(address,uint256):(bool)"
TOKEN_TRANSFER_PARAMS = ("target", "amount")
TOKEN_BALANCE_SIGNATURE = "balanceOf(address):(uint256)"
TOKEN_BALANCE_PARAMS = ("target",)

ZERO_HEX = "0x0"


class AbiType(str, Enum):
    """ABI types accepted by the call encoder."""

    ADDRESS = "address"
    UINT256 = "uint256"
    BOOL = "bool"


# Canonical names for shorthand types, as used when hashing a signature.
ABI_TYPE_ALIASES = {
    "uint": AbiType.UINT256.value,
}

UINT256_MAX = 2**256 - 1
