"""Exception hierarchy for deterministic EVM transaction construction."""

from typing import Any


class DeterministicError(Exception):
    """Base exception for all key derivation and transaction construction errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DeterministicError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class MissingUnspentData(ValidationError):
    """Raised when no pre-transactional (unspent) snapshot is supplied."""

    def __init__(self, message: str = "Missing unspent (pre-transactional) data"):
        super().__init__(message, field="unspent")


class InvalidFeeInputs(ValidationError):
    """Raised when the fee rate cannot be back-solved from the fee inputs."""

    pass


class UnsupportedFeature(ValidationError):
    """Raised when an intent combines features the engine cannot encode."""

    pass


class UnknownParameter(ValidationError):
    """Raised when a call parameter name has no value in the argument map."""

    def __init__(self, name: str, available: list[str] | None = None):
        super().__init__(
            f"Unknown parameter '{name}' for contract call",
            field=name,
            details={"available": available or []},
        )
        self.name = name


class UnsupportedType(ValidationError):
    """Raised for ABI types outside address, uint256 and bool."""

    def __init__(self, abi_type: str, signature: str | None = None):
        super().__init__(
            f"Unsupported ABI type: {abi_type}",
            field="signature",
            value=signature,
            details={"type": abi_type},
        )
        self.abi_type = abi_type


class MalformedKey(ValidationError):
    """Raised when an imported private key is not exactly 32 bytes."""

    def __init__(self, message: str, length: int | None = None):
        super().__init__(message, field="private_key", details={"length": length})
        self.length = length


class SigningError(DeterministicError):
    """Raised when the signer rejects the assembled transaction."""

    pass
