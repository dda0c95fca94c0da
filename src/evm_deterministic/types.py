"""Type definitions and data models for deterministic transaction construction."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from eth_typing import HexStr
from hexbytes import HexBytes
from web3 import Web3

from .constants import PRIVATE_KEY_LENGTH
from .exceptions import MalformedKey, UnsupportedFeature, ValidationError
from .utils import Numeric, to_decimal, to_int

Address = str  # 0x-prefixed 20-byte hex address


class TransferMode(str, Enum):
    """Payload encoding mode of a transfer."""

    NATIVE = "native"
    TOKEN = "token"


@dataclass(frozen=True)
class KeyPair:
    """Private key plus an optional, lazily derivable public key."""

    private_key: bytes
    public_key: bytes | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.private_key, bytes | bytearray):
            raise MalformedKey("Private key must be bytes")
        if len(self.private_key) != PRIVATE_KEY_LENGTH:
            raise MalformedKey(
                f"Private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(self.private_key)}",
                length=len(self.private_key),
            )
        object.__setattr__(self, "private_key", bytes(self.private_key))

    def derived_public_key(self) -> bytes:
        """Return ``public_key``, deriving it from the private key when absent."""
        if self.public_key is not None:
            return self.public_key

        from .keys import derive_public_key

        return derive_public_key(self.private_key)

    def __repr__(self) -> str:
        return "KeyPair(private_key=<redacted>)"


@dataclass(frozen=True)
class UnspentSnapshot:
    """Sender nonce and declared gas schedule at construction time."""

    nonce: int
    gas_base_fee: Decimal
    gas_limit: Decimal
    gas_data_fee: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nonce", to_int(self.nonce, "nonce"))
        object.__setattr__(self, "gas_base_fee", to_decimal(self.gas_base_fee, "gasBaseFee"))
        object.__setattr__(self, "gas_limit", to_decimal(self.gas_limit, "gasLimit"))
        object.__setattr__(self, "gas_data_fee", to_decimal(self.gas_data_fee, "gasDataFee"))

        if self.gas_limit <= 0:
            raise ValidationError(
                "gasLimit must be positive", field="gasLimit", value=self.gas_limit
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UnspentSnapshot:
        """Construct a snapshot from the camelCase or snake_case dictionary form."""

        def pick(camel: str, snake: str, default: Any = None) -> Any:
            if camel in data:
                return data[camel]
            if snake in data:
                return data[snake]
            if default is not None:
                return default
            raise ValidationError(f"Unspent data is missing {camel}", field=camel)

        return cls(
            nonce=pick("nonce", "nonce"),
            gas_base_fee=pick("gasBaseFee", "gas_base_fee"),
            gas_limit=pick("gasLimit", "gas_limit"),
            gas_data_fee=pick("gasDataFee", "gas_data_fee", 0),
        )


def _require_address(value: Any, field: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Transfer intent is missing {field}", field=field, value=value)


@dataclass(frozen=True)
class NativeTransfer:
    """Transfer of the chain's native asset, optionally carrying a raw message."""

    target: Address
    amount: Numeric
    fee: Numeric
    message: bytes | None = None

    def __post_init__(self) -> None:
        _require_address(self.target, "target")

    @property
    def mode(self) -> TransferMode:
        return TransferMode.NATIVE


@dataclass(frozen=True)
class TokenTransfer:
    """ERC-20 style token transfer through the contract's ``transfer`` function."""

    target: Address
    amount: Numeric
    fee: Numeric
    contract: Address

    def __post_init__(self) -> None:
        _require_address(self.target, "target")
        _require_address(self.contract, "contract")

    @property
    def mode(self) -> TransferMode:
        return TransferMode.TOKEN


TransferIntent = Union[NativeTransfer, TokenTransfer]


def normalise_message(value: Any) -> bytes | None:
    """Return message bytes; valid 0x hex is decoded, other text is UTF-8 encoded."""
    if value is None:
        return None

    if isinstance(value, bytes | bytearray):
        message = bytes(value)
    elif isinstance(value, str):
        if value.lower().startswith("0x"):
            try:
                message = Web3.to_bytes(hexstr=HexStr(value))
            except ValueError:
                message = value.encode("utf-8")
        else:
            message = value.encode("utf-8")
    else:
        raise ValidationError("Message must be bytes or text", field="message", value=value)

    return message or None


def parse_intent(data: Mapping[str, Any]) -> TransferIntent:
    """Construct a typed intent from the loose ``{mode, target, ...}`` dictionary form.

    A missing mode means a native transfer. Token transfers carrying a message are
    rejected here, before any call data is encoded.
    """
    raw_mode = data.get("mode") or TransferMode.NATIVE
    try:
        mode = (
            raw_mode if isinstance(raw_mode, TransferMode) else TransferMode(str(raw_mode).lower())
        )
    except ValueError:
        raise ValidationError(f"Unknown transfer mode: {raw_mode}", field="mode", value=raw_mode)

    for required in ("target", "fee"):
        if data.get(required) is None:
            raise ValidationError(f"Transfer intent is missing {required}", field=required)

    message = normalise_message(data.get("message"))

    if mode is TransferMode.NATIVE:
        return NativeTransfer(
            target=data["target"],
            amount=data.get("amount", 0),
            fee=data["fee"],
            message=message,
        )

    if message is not None:
        raise UnsupportedFeature(
            "Cannot send attachment data with token transfers",
            field="message",
            value=data.get("message"),
        )

    return TokenTransfer(
        target=data["target"],
        amount=data.get("amount", 0),
        fee=data["fee"],
        contract=data.get("contract"),
    )


@dataclass(frozen=True)
class TransactionParams:
    """Chain-ready legacy transaction fields, quantities as minimal ``0x`` hex."""

    nonce: str
    gas_price: str
    gas_limit: str
    to: Address
    value: str
    data: bytes | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the camelCase wire form."""

        params: dict[str, Any] = {
            "nonce": self.nonce,
            "gasPrice": self.gas_price,
            "gasLimit": self.gas_limit,
            "to": self.to,
            "value": self.value,
        }
        if self.data is not None:
            params["data"] = HexBytes(self.data).to_0x_hex()
        return params

    def as_signable(self, chain_id: int | None = None) -> dict[str, Any]:
        """Return the integer-valued dictionary consumed by ``eth_account``."""

        try:
            to = Web3.to_checksum_address(self.to)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                "Invalid destination address", field="to", value=self.to
            ) from exc

        signable: dict[str, Any] = {
            "nonce": int(self.nonce, 16),
            "gasPrice": int(self.gas_price, 16),
            "gas": int(self.gas_limit, 16),
            "to": to,
            "value": int(self.value, 16),
            "data": self.data or b"",
        }
        if chain_id is not None:
            signable["chainId"] = chain_id
        return signable


@dataclass(frozen=True)
class CallSpec:
    """Function signature plus arguments resolved by name in declared order."""

    signature: str
    param_order: Sequence[str]
    args: Mapping[str, Any]

    def encode(self) -> bytes:
        from .abi import encode_call

        return encode_call(self.signature, self.param_order, self.args)
