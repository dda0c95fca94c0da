"""Tests for key and address derivation."""

import hashlib

import pytest
from eth_keys import keys as eth_keys

from evm_deterministic.exceptions import MalformedKey, ValidationError
from evm_deterministic.keys import (
    derive_address,
    derive_keys,
    derive_public_key,
    generate_keys,
    import_private_key,
    private_key_hex,
    public_key_hex,
)
from evm_deterministic.randomness import SecureRandom
from evm_deterministic.types import KeyPair

KNOWN_PRIVATE_KEY = "4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
KNOWN_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


class TestDeriveKeys:
    """Test seed to private key derivation."""

    def test_private_key_is_sha256_of_seed(self):
        """Test the private key is the SHA-256 digest of the seed."""
        assert derive_keys("correct horse").private_key == hashlib.sha256(b"correct horse").digest()

    def test_deterministic(self):
        """Test the same seed always gives the same key."""
        assert derive_keys("seed") == derive_keys("seed")
        assert derive_keys("seed") != derive_keys("seed2")

    def test_hex_seed_is_decoded(self):
        """Test 0x-prefixed seeds are hashed as raw bytes."""
        assert derive_keys("0x616263") == derive_keys(b"abc")

    def test_unsupported_seed(self):
        """Test non-text, non-bytes seeds are rejected."""
        with pytest.raises(ValidationError):
            derive_keys(12345)  # type: ignore[arg-type]


class TestImportPrivateKey:
    """Test raw private key import."""

    def test_hex_with_and_without_prefix(self):
        """Test both hex spellings import the same key."""
        assert import_private_key(KNOWN_PRIVATE_KEY) == import_private_key("0x" + KNOWN_PRIVATE_KEY)

    def test_bytes(self):
        """Test raw bytes import."""
        raw = bytes.fromhex(KNOWN_PRIVATE_KEY)
        assert import_private_key(raw).private_key == raw

    def test_short_key(self):
        """Test keys shorter than 32 bytes are malformed."""
        with pytest.raises(MalformedKey) as exc_info:
            import_private_key("ab" * 31)
        assert exc_info.value.length == 31

    def test_long_key(self):
        """Test keys longer than 32 bytes are malformed."""
        with pytest.raises(MalformedKey):
            import_private_key(b"\x01" * 33)

    def test_invalid_hex(self):
        """Test non-hex text is malformed."""
        with pytest.raises(MalformedKey):
            import_private_key("zz" * 32)


def test_known_address() -> None:
    assert derive_address(bytes.fromhex(KNOWN_PRIVATE_KEY)) == KNOWN_ADDRESS


def test_public_key_matches_address() -> None:
    private_key = derive_keys("seed").private_key
    public_key = derive_public_key(private_key)

    assert len(public_key) == 64
    assert eth_keys.PublicKey(public_key).to_checksum_address() == derive_address(private_key)


def test_key_outside_curve_range() -> None:
    with pytest.raises(MalformedKey):
        derive_public_key(b"\xff" * 32)


def test_address_of_key_outside_curve_range() -> None:
    with pytest.raises(MalformedKey) as exc_info:
        derive_address(b"\xff" * 32)
    assert exc_info.value.length == 32


def test_hex_exports() -> None:
    keys = import_private_key(KNOWN_PRIVATE_KEY)
    assert private_key_hex(keys) == KNOWN_PRIVATE_KEY
    assert public_key_hex(keys) == derive_public_key(keys.private_key).hex()
    assert KeyPair(private_key=keys.private_key).derived_public_key() == bytes.fromhex(
        public_key_hex(keys)
    )


def test_generate_keys_uses_random_source() -> None:
    class FixedBackend:
        def token_bytes(self, length: int) -> bytes:
            return b"\x07" * length

    keys = generate_keys(SecureRandom(FixedBackend()))
    assert keys == derive_keys(b"\x07" * 32)


def test_generate_keys_default_source() -> None:
    assert generate_keys() != generate_keys()
