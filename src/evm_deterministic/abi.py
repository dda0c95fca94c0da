"""Generic contract-call encoding against a named argument map."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from eth_abi import encode as abi_encode
from eth_typing import HexStr
from web3 import Web3
from web3.types import ChecksumAddress

from .constants import (
    ABI_TYPE_ALIASES,
    SELECTOR_LENGTH,
    TOKEN_BALANCE_PARAMS,
    TOKEN_BALANCE_SIGNATURE,
    UINT256_MAX,
    AbiType,
)
from .exceptions import UnknownParameter, UnsupportedType, ValidationError
from .utils import to_int

logger = logging.getLogger(__name__)

_SIGNATURE_PATTERN = re.compile(
    r"^\s*(?P<name>[A-Za-z_$][A-Za-z0-9_$]*)\s*"
    r"\((?P<inputs>[^()]*)\)\s*"
    r"(?::\s*\((?P<outputs>[^()]*)\))?\s*$"
)

_SUPPORTED_TYPES = {abi_type.value for abi_type in AbiType}


@dataclass(frozen=True)
class FunctionSignature:
    """Parsed ``name(inputs):(outputs)`` function signature."""

    name: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...] = ()

    @property
    def canonical(self) -> str:
        """Signature text hashed into the selector, without return types."""
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return bytes(Web3.keccak(text=self.canonical)[:SELECTOR_LENGTH])


def _parse_types(raw: str | None, signature: str) -> tuple[str, ...]:
    if raw is None or not raw.strip():
        return ()

    types = []
    for part in raw.split(","):
        abi_type = part.strip()
        if not abi_type:
            raise ValidationError("Empty parameter type", field="signature", value=signature)
        abi_type = ABI_TYPE_ALIASES.get(abi_type, abi_type)
        if abi_type not in _SUPPORTED_TYPES:
            raise UnsupportedType(abi_type, signature)
        types.append(abi_type)
    return tuple(types)


def parse_signature(signature: str) -> FunctionSignature:
    """Parse a signature such as ``transfer(address,uint256):(bool)``."""
    match = _SIGNATURE_PATTERN.match(signature or "")
    if match is None:
        raise ValidationError("Malformed function signature", field="signature", value=signature)

    return FunctionSignature(
        name=match.group("name"),
        inputs=_parse_types(match.group("inputs"), signature),
        outputs=_parse_types(match.group("outputs"), signature),
    )


def function_selector(signature: str) -> bytes:
    """Return the 4-byte selector of ``signature``."""
    return parse_signature(signature).selector


def _coerce_address(name: str, value: Any) -> ChecksumAddress:
    if isinstance(value, bytes | bytearray):
        if len(value) != 20:
            raise ValidationError("Address must be 20 bytes", field=name, value=value)
        value = "0x" + bytes(value).hex()

    if not isinstance(value, str):
        raise ValidationError("Address must be a hex string", field=name, value=value)

    try:
        return Web3.to_checksum_address(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            "Invalid address", field=name, value=value, details={"error": str(exc)}
        ) from exc


def _coerce_uint256(name: str, value: Any) -> int:
    if not isinstance(value, int | str | Decimal) or isinstance(value, bool):
        raise ValidationError("uint256 must be an integer quantity", field=name, value=value)

    integer = to_int(value, name)
    if integer > UINT256_MAX:
        raise ValidationError("Value exceeds uint256 maximum", field=name, value=value)
    return integer


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValidationError("bool must be True/False or 0/1", field=name, value=value)


_COERCERS = {
    AbiType.ADDRESS.value: _coerce_address,
    AbiType.UINT256.value: _coerce_uint256,
    AbiType.BOOL.value: _coerce_bool,
}


def encode_call(signature: str, param_order: Sequence[str], args: Mapping[str, Any]) -> bytes:
    """Encode ``selector || head`` for a call whose arguments are looked up by name.

    Args:
        signature: Function signature, e.g. ``"transfer(address,uint256):(bool)"``.
        param_order: Argument names in declaration order.
        args: Mapping from argument name to value.

    Returns:
        Call data bytes.

    Raises:
        UnknownParameter: If a name in ``param_order`` is absent from ``args``.
        UnsupportedType: If the signature declares a type other than address, uint256 or bool.
        ValidationError: If the signature is malformed or a value does not fit its type.
    """
    parsed = parse_signature(signature)

    if len(param_order) != len(parsed.inputs):
        raise ValidationError(
            f"{parsed.canonical} takes {len(parsed.inputs)} arguments, "
            f"got {len(param_order)} parameter names",
            field="param_order",
            value=list(param_order),
        )

    values = []
    for name, abi_type in zip(param_order, parsed.inputs):
        if name not in args:
            raise UnknownParameter(name, sorted(args))
        values.append(_COERCERS[abi_type](name, args[name]))

    encoded = parsed.selector + abi_encode(list(parsed.inputs), values)
    logger.debug("Encoded %s call (%d bytes)", parsed.canonical, len(encoded))
    return encoded


def encode_call_hex(signature: str, param_order: Sequence[str], args: Mapping[str, Any]) -> HexStr:
    """Same as :func:`encode_call`, returned as ``0x`` prefixed hex."""
    return HexStr("0x" + encode_call(signature, param_order, args).hex())


def encode_balance_of(target: str) -> HexStr:
    """Call data for an ERC-20 ``balanceOf`` query on ``target``."""
    return encode_call_hex(TOKEN_BALANCE_SIGNATURE, TOKEN_BALANCE_PARAMS, {"target": target})
