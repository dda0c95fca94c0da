"""Deterministic key and transaction client.

Groups the key derivation, call encoding and transaction construction operations
behind one object bound to a :class:`ClientConfig`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from eth_typing import HexStr
from web3.types import ChecksumAddress

from .abi import encode_balance_of, encode_call_hex
from .config import ClientConfig
from .exceptions import DeterministicError
from .keys import (
    as_key_pair,
    derive_address,
    derive_keys,
    generate_keys,
    import_private_key,
    private_key_hex,
    public_key_hex,
)
from .randomness import SecureRandom
from .transaction import build_transaction, sign_transaction
from .types import KeyPair, TransactionParams, TransferIntent, UnspentSnapshot

logger = logging.getLogger(__name__)


class DeterministicClient:
    """Derive keys and build signed transactions without touching the network."""

    def __init__(
        self,
        *,
        chain_id: int | None = None,
        config: ClientConfig | None = None,
        random: SecureRandom | None = None,
    ) -> None:
        if config is None:
            config = ClientConfig(chain_id=chain_id)
        elif chain_id is not None:
            config = config.with_chain_id(chain_id)

        self._config = config
        self._random = random

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------
    def keys(self, seed: str | bytes) -> KeyPair:
        return derive_keys(seed)

    def generate(self) -> KeyPair:
        return generate_keys(self._random)

    def import_private(self, private_key: str | bytes) -> KeyPair:
        return import_private_key(private_key)

    def address(self, keys: KeyPair | str | bytes) -> ChecksumAddress:
        return derive_address(as_key_pair(keys).private_key)

    def public_key(self, keys: KeyPair | str | bytes) -> str:
        return public_key_hex(as_key_pair(keys))

    def private_key(self, keys: KeyPair | str | bytes) -> str:
        return private_key_hex(as_key_pair(keys))

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------
    def encode(
        self, signature: str, param_order: Sequence[str], args: Mapping[str, Any]
    ) -> HexStr:
        return encode_call_hex(signature, param_order, args)

    def encode_balance_of(self, target: str) -> HexStr:
        return encode_balance_of(target)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def build(
        self,
        intent: TransferIntent | Mapping[str, Any],
        unspent: UnspentSnapshot | Mapping[str, Any] | None,
        keys: KeyPair | str | bytes | None = None,
    ) -> TransactionParams:
        return build_transaction(
            intent,
            unspent,
            keys,
            transfer_signature=self._config.token_transfer_signature,
        )

    def transaction(
        self,
        intent: TransferIntent | Mapping[str, Any],
        unspent: UnspentSnapshot | Mapping[str, Any] | None,
        keys: KeyPair | str | bytes,
    ) -> str:
        """Build and sign a transaction, returning the raw ``0x`` hex encoding."""

        params = self.build(intent, unspent, keys)
        logger.info("Signing transaction to=%s chain_id=%s", params.to, self._config.chain_id)
        return sign_transaction(params, keys, self._config.chain_id)

    def transaction_with_callbacks(
        self,
        intent: TransferIntent | Mapping[str, Any],
        unspent: UnspentSnapshot | Mapping[str, Any] | None,
        keys: KeyPair | str | bytes,
        data_callback: Callable[[str], Any],
        error_callback: Callable[[DeterministicError], Any],
    ) -> None:
        """Report the raw transaction to ``data_callback`` or the failure to ``error_callback``."""

        try:
            raw = self.transaction(intent, unspent, keys)
        except DeterministicError as exc:
            logger.warning("Transaction construction failed: %s", exc.message)
            error_callback(exc)
            return
        data_callback(raw)
