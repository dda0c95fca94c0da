"""Transaction assembly and signing."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from eth_account import Account

from .constants import TOKEN_TRANSFER_PARAMS, TOKEN_TRANSFER_SIGNATURE, ZERO_HEX
from .exceptions import MissingUnspentData, SigningError, ValidationError
from .fees import resolve_fee_rate
from .keys import as_key_pair
from .types import (
    CallSpec,
    KeyPair,
    NativeTransfer,
    TokenTransfer,
    TransactionParams,
    TransferIntent,
    UnspentSnapshot,
    normalise_message,
    parse_intent,
)
from .utils import to_hex, to_integral

logger = logging.getLogger(__name__)


def _as_intent(intent: TransferIntent | Mapping[str, Any]) -> TransferIntent:
    if isinstance(intent, NativeTransfer | TokenTransfer):
        return intent
    if isinstance(intent, Mapping):
        return parse_intent(intent)
    raise ValidationError("Unsupported transfer intent", field="intent", value=intent)


def _as_unspent(unspent: UnspentSnapshot | Mapping[str, Any] | None) -> UnspentSnapshot:
    if unspent is None:
        raise MissingUnspentData()
    if isinstance(unspent, UnspentSnapshot):
        return unspent
    if isinstance(unspent, Mapping):
        return UnspentSnapshot.from_dict(unspent)
    raise ValidationError("Unsupported unspent data", field="unspent", value=unspent)


def build_transaction(
    intent: TransferIntent | Mapping[str, Any],
    unspent: UnspentSnapshot | Mapping[str, Any] | None,
    keys: KeyPair | str | bytes | None = None,
    *,
    transfer_signature: str = TOKEN_TRANSFER_SIGNATURE,
) -> TransactionParams:
    """Resolve the fee rate and assemble the unsigned transaction fields.

    Native transfers send ``amount`` to ``target`` and attach ``message`` verbatim as
    data. Token transfers send a zero-value call to ``contract`` whose data encodes
    ``transfer(target, amount)``.

    ``keys``, when supplied, is checked before anything is assembled so a malformed
    key never yields params.
    """
    unspent = _as_unspent(unspent)
    intent = _as_intent(intent)
    if keys is not None:
        as_key_pair(keys)

    fee_rate = resolve_fee_rate(intent.fee, unspent.gas_base_fee, unspent.gas_data_fee)
    nonce = to_hex(unspent.nonce, "nonce")
    gas_price = to_hex(fee_rate, "gasPrice")
    gas_limit = to_hex(to_integral(unspent.gas_limit, "gasLimit"), "gasLimit")

    if isinstance(intent, NativeTransfer):
        params = TransactionParams(
            nonce=nonce,
            gas_price=gas_price,
            gas_limit=gas_limit,
            to=intent.target,
            value=to_hex(intent.amount, "amount"),
            data=normalise_message(intent.message),
        )
    else:
        call = CallSpec(
            signature=transfer_signature,
            param_order=TOKEN_TRANSFER_PARAMS,
            args={"target": intent.target, "amount": to_hex(intent.amount, "amount")},
        )
        params = TransactionParams(
            nonce=nonce,
            gas_price=gas_price,
            gas_limit=gas_limit,
            to=intent.contract,
            value=ZERO_HEX,
            data=call.encode(),
        )

    logger.debug(
        "Assembled %s transaction nonce=%s gasPrice=%s gasLimit=%s",
        intent.mode.value,
        nonce,
        gas_price,
        gas_limit,
    )
    return params


def sign_transaction(
    params: TransactionParams,
    keys: KeyPair | str | bytes,
    chain_id: int | None = None,
) -> str:
    """Sign ``params`` and return the RLP-serialized raw transaction as ``0x`` hex.

    Without ``chain_id`` the signature is a legacy (pre EIP-155) one.
    """
    key_pair = as_key_pair(keys)
    signable = params.as_signable(chain_id)

    try:
        signed = Account.sign_transaction(signable, key_pair.private_key)
    except Exception as exc:
        raise SigningError(
            "Failed to sign transaction",
            details={"params": params.as_dict(), "error": str(exc)},
        ) from exc

    raw = signed.raw_transaction.to_0x_hex()
    logger.info("Signed transaction to=%s hash=%s", params.to, signed.hash.to_0x_hex())
    return raw


def build_and_sign(
    intent: TransferIntent | Mapping[str, Any],
    unspent: UnspentSnapshot | Mapping[str, Any] | None,
    keys: KeyPair | str | bytes,
    chain_id: int | None = None,
    *,
    transfer_signature: str = TOKEN_TRANSFER_SIGNATURE,
) -> str:
    params = build_transaction(intent, unspent, keys, transfer_signature=transfer_signature)
    return sign_transaction(params, keys, chain_id)
