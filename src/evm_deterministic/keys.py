"""Deterministic key and address derivation.

The curve arithmetic is delegated to ``eth_keys``/``eth_account``; this module only
fixes how seeds, raw keys and their exports map onto each other.
"""

from __future__ import annotations

import hashlib
import logging
from typing import cast

from eth_account import Account
from eth_keys import keys as eth_keys
from eth_typing import HexStr
from eth_utils import ValidationError as CurveValidationError
from web3 import Web3
from web3.types import ChecksumAddress

from .constants import PRIVATE_KEY_LENGTH
from .exceptions import MalformedKey, ValidationError
from .randomness import SecureRandom
from .types import KeyPair

logger = logging.getLogger(__name__)

SEED_LENGTH = 32


def _seed_bytes(seed: str | bytes) -> bytes:
    if isinstance(seed, bytes | bytearray):
        return bytes(seed)

    if isinstance(seed, str):
        if seed.lower().startswith("0x"):
            try:
                return Web3.to_bytes(hexstr=HexStr(seed))
            except ValueError as exc:
                raise ValidationError("Invalid hex seed", field="seed") from exc
        return seed.encode("utf-8")

    raise ValidationError(f"Unsupported seed type: {type(seed).__name__}", field="seed")


def derive_keys(seed: str | bytes) -> KeyPair:
    """Derive a key pair whose private key is ``sha256(seed)``."""
    return KeyPair(private_key=hashlib.sha256(_seed_bytes(seed)).digest())


def generate_keys(random: SecureRandom | None = None) -> KeyPair:
    """Derive a key pair from a fresh random seed."""
    source = random or SecureRandom()
    return derive_keys(source.random_bytes(SEED_LENGTH))


def import_private_key(private_key: str | bytes) -> KeyPair:
    """Import a raw private key given as bytes or (optionally 0x-prefixed) hex."""
    if isinstance(private_key, str):
        text = private_key[2:] if private_key.lower().startswith("0x") else private_key
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise MalformedKey("Private key is not valid hex") from exc
    elif isinstance(private_key, bytes | bytearray):
        raw = bytes(private_key)
    else:
        raise MalformedKey(f"Unsupported private key type: {type(private_key).__name__}")

    if len(raw) != PRIVATE_KEY_LENGTH:
        raise MalformedKey(
            f"Private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(raw)}", length=len(raw)
        )
    return KeyPair(private_key=raw)


def as_key_pair(keys: KeyPair | str | bytes) -> KeyPair:
    if isinstance(keys, KeyPair):
        return keys
    return import_private_key(keys)


def _curve_key(private_key: bytes) -> eth_keys.PrivateKey:
    try:
        return eth_keys.PrivateKey(private_key)
    except CurveValidationError as exc:
        raise MalformedKey(
            "Private key is outside the secp256k1 range", length=len(private_key)
        ) from exc


def derive_public_key(private_key: bytes) -> bytes:
    """Return the 64-byte uncompressed public key (no ``0x04`` prefix)."""
    return _curve_key(as_key_pair(private_key).private_key).public_key.to_bytes()


def derive_address(private_key: bytes) -> ChecksumAddress:
    """Return the checksummed account address controlled by ``private_key``."""
    raw = as_key_pair(private_key).private_key
    try:
        account = Account.from_key(raw)
    except (CurveValidationError, ValueError) as exc:
        raise MalformedKey(
            "Failed to derive account from private key", length=len(raw)
        ) from exc
    return cast(ChecksumAddress, account.address)


def public_key_hex(keys: KeyPair) -> str:
    return keys.derived_public_key().hex()


def private_key_hex(keys: KeyPair) -> str:
    return keys.private_key.hex()
