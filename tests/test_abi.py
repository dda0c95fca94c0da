"""Tests for contract-call encoding."""

from decimal import Decimal

import pytest
from web3 import Web3

from evm_deterministic.abi import (
    encode_balance_of,
    encode_call,
    encode_call_hex,
    function_selector,
    parse_signature,
)
from evm_deterministic.constants import TOKEN_TRANSFER_SIGNATURE
from evm_deterministic.exceptions import UnknownParameter, UnsupportedType, ValidationError

TARGET = "0x" + "ab" * 20


def _word(value: int) -> bytes:
    return value.to_bytes(32, "big")


class TestParseSignature:
    """Test signature parsing."""

    def test_inputs_and_outputs(self):
        """Test a signature with a return clause."""
        parsed = parse_signature("transfer(address,uint256):(bool)")
        assert parsed.name == "transfer"
        assert parsed.inputs == ("address", "uint256")
        assert parsed.outputs == ("bool",)
        assert parsed.canonical == "transfer(address,uint256)"

    def test_without_outputs(self):
        """Test the return clause is optional."""
        parsed = parse_signature("approve(address, uint256)")
        assert parsed.inputs == ("address", "uint256")
        assert parsed.outputs == ()

    def test_no_arguments(self):
        """Test a function without parameters."""
        assert parse_signature("totalSupply():(uint256)").inputs == ()

    def test_uint_alias(self):
        """Test the uint shorthand canonicalises to uint256."""
        assert parse_signature("mint(uint)").canonical == "mint(uint256)"

    def test_unsupported_input_type(self):
        """Test dynamic types are rejected."""
        with pytest.raises(UnsupportedType) as exc_info:
            parse_signature("setName(string)")
        assert exc_info.value.abi_type == "string"

    def test_unsupported_output_type(self):
        """Test return types are checked too."""
        with pytest.raises(UnsupportedType):
            parse_signature("name():(string)")

    def test_malformed(self):
        """Test text that is not a signature."""
        with pytest.raises(ValidationError):
            parse_signature("transfer")


def test_known_selectors() -> None:
    assert function_selector("transfer(address,uint256):(bool)").hex() == "a9059cbb"
    assert function_selector("balanceOf(address):(uint256)").hex() == "70a08231"


def test_transfer_encoding() -> None:
    encoded = encode_call(
        TOKEN_TRANSFER_SIGNATURE, ["target", "amount"], {"target": TARGET, "amount": 100}
    )

    assert len(encoded) == 4 + 64
    assert encoded[:4] == bytes.fromhex("a9059cbb")
    assert encoded[4:36] == bytes(12) + bytes.fromhex("ab" * 20)
    assert encoded[36:] == _word(100)


def test_order_follows_param_order_not_mapping() -> None:
    spender = "0x" + "11" * 20
    owner = "0x" + "22" * 20
    encoded = encode_call(
        "allowance(address,address):(uint256)",
        ["owner", "spender"],
        {"spender": spender, "owner": owner},
    )
    assert encoded[4:36] == bytes(12) + bytes.fromhex("22" * 20)
    assert encoded[36:68] == bytes(12) + bytes.fromhex("11" * 20)


@pytest.mark.parametrize("amount", [100, "100", "0x64", Decimal("100")])
def test_uint256_coercion(amount: object) -> None:
    encoded = encode_call(
        TOKEN_TRANSFER_SIGNATURE, ["target", "amount"], {"target": TARGET, "amount": amount}
    )
    assert encoded[36:] == _word(100)


def test_address_bytes() -> None:
    encoded = encode_call("balanceOf(address)", ["who"], {"who": bytes.fromhex("ab" * 20)})
    assert encoded[4:] == bytes(12) + bytes.fromhex("ab" * 20)


def test_bool_encoding() -> None:
    encoded = encode_call("setPaused(bool)", ["paused"], {"paused": True})
    selector = bytes(Web3.keccak(text="setPaused(bool)")[:4])
    assert encoded == selector + _word(1)


def test_extra_args_are_ignored() -> None:
    encoded = encode_call("balanceOf(address)", ["target"], {"target": TARGET, "unused": 1})
    assert len(encoded) == 36


def test_unknown_parameter() -> None:
    with pytest.raises(UnknownParameter) as exc_info:
        encode_call(TOKEN_TRANSFER_SIGNATURE, ["target", "amount"], {"target": TARGET})
    assert exc_info.value.name == "amount"


def test_param_count_mismatch() -> None:
    with pytest.raises(ValidationError):
        encode_call(TOKEN_TRANSFER_SIGNATURE, ["target"], {"target": TARGET})


@pytest.mark.parametrize(
    ("signature", "args"),
    [
        ("balanceOf(address)", {"x": "0x1234"}),
        ("balanceOf(address)", {"x": 1}),
        ("mint(uint256)", {"x": -1}),
        ("mint(uint256)", {"x": 2**256}),
        ("mint(uint256)", {"x": "1.5"}),
        ("mint(uint256)", {"x": True}),
        ("setPaused(bool)", {"x": 2}),
        ("setPaused(bool)", {"x": "yes"}),
    ],
)
def test_invalid_values(signature: str, args: dict) -> None:
    with pytest.raises(ValidationError) as exc_info:
        encode_call(signature, ["x"], args)
    assert exc_info.value.field == "x"


def test_encode_call_hex_prefix() -> None:
    assert encode_call_hex("totalSupply()", [], {}) == "0x18160ddd"


def test_balance_of_call_data() -> None:
    assert encode_balance_of(TARGET) == "0x70a08231" + "00" * 12 + "ab" * 20
