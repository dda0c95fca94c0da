"""Deterministic EVM keys and offline transaction construction.

Derives account keys from a seed and assembles signed native or ERC-20 token
transfers from a fee budget and a gas schedule, without network I/O.
"""

from .abi import (
    FunctionSignature,
    encode_balance_of,
    encode_call,
    encode_call_hex,
    function_selector,
    parse_signature,
)
from .client import DeterministicClient
from .config import ClientConfig
from .constants import TOKEN_BALANCE_SIGNATURE, TOKEN_TRANSFER_SIGNATURE, AbiType
from .exceptions import (
    DeterministicError,
    InvalidFeeInputs,
    MalformedKey,
    MissingUnspentData,
    SigningError,
    UnknownParameter,
    UnsupportedFeature,
    UnsupportedType,
    ValidationError,
)
from .fees import resolve_fee_rate
from .keys import derive_address, derive_keys, derive_public_key, generate_keys, import_private_key
from .randomness import SecureRandom
from .transaction import build_and_sign, build_transaction, sign_transaction
from .types import (
    Address,
    CallSpec,
    KeyPair,
    NativeTransfer,
    TokenTransfer,
    TransactionParams,
    TransferIntent,
    TransferMode,
    UnspentSnapshot,
    parse_intent,
)
from .utils import to_decimal, to_hex, to_int, to_integral

__version__ = "0.1.0"

__all__ = [
    # Client
    "DeterministicClient",
    "ClientConfig",
    # Types
    "Address",
    "CallSpec",
    "FunctionSignature",
    "KeyPair",
    "NativeTransfer",
    "TokenTransfer",
    "TransactionParams",
    "TransferIntent",
    "TransferMode",
    "UnspentSnapshot",
    "AbiType",
    "TOKEN_TRANSFER_SIGNATURE",
    "TOKEN_BALANCE_SIGNATURE",
    # Exceptions
    "DeterministicError",
    "ValidationError",
    "MissingUnspentData",
    "InvalidFeeInputs",
    "UnsupportedFeature",
    "UnknownParameter",
    "UnsupportedType",
    "MalformedKey",
    "SigningError",
    # Operations
    "build_transaction",
    "sign_transaction",
    "build_and_sign",
    "parse_intent",
    "encode_call",
    "encode_call_hex",
    "encode_balance_of",
    "function_selector",
    "parse_signature",
    "resolve_fee_rate",
    "derive_keys",
    "derive_address",
    "derive_public_key",
    "generate_keys",
    "import_private_key",
    "SecureRandom",
    # Decimal helpers
    "to_decimal",
    "to_hex",
    "to_int",
    "to_integral",
]
