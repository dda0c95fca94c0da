"""Configuration container for the deterministic transaction client."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .constants import TOKEN_TRANSFER_SIGNATURE
from .exceptions import ValidationError


@dataclass(frozen=True)
class ClientConfig:
    """Options applied to every transaction the client builds."""

    chain_id: int | None = None
    token_transfer_signature: str = TOKEN_TRANSFER_SIGNATURE

    def __post_init__(self) -> None:
        if self.chain_id is not None and self.chain_id <= 0:
            raise ValidationError(
                "chain_id must be positive", field="chain_id", value=self.chain_id
            )

    def with_chain_id(self, chain_id: int | None) -> ClientConfig:
        """Return a copy signing for ``chain_id`` (``None`` for legacy signatures)."""

        return replace(self, chain_id=chain_id)
