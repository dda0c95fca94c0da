"""Cryptographically secure random bytes with a synthesized buffer fill."""

from __future__ import annotations

import logging
import secrets
from typing import Any

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class SecureRandom:
    """Expose ``random_bytes(n)`` over a secure backend.

    The backend is probed once at construction. A backend offering ``fill(buffer)``
    is used directly; otherwise the fill is synthesized from ``token_bytes(n)``,
    copying one slot at a time. The default backend is :mod:`secrets`.
    """

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend if backend is not None else secrets

        native_fill = getattr(self._backend, "fill", None)
        if callable(native_fill):
            self._fill = native_fill
            self.synthesized = False
        elif callable(getattr(self._backend, "token_bytes", None)):
            self._fill = self._fill_from_bytes
            self.synthesized = True
            logger.debug(
                "Random backend %r lacks fill(); synthesizing from token_bytes", self._backend
            )
        else:
            raise ValidationError(
                "Random backend must provide fill(buffer) or token_bytes(n)",
                field="backend",
                value=repr(backend),
            )

    def _fill_from_bytes(self, buffer: bytearray) -> None:
        source = self._backend.token_bytes(len(buffer))
        for index in range(len(buffer)):
            buffer[index] = source[index]

    def fill(self, buffer: bytearray) -> None:
        self._fill(buffer)

    def random_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValidationError("Length cannot be negative", field="length", value=length)
        buffer = bytearray(length)
        self._fill(buffer)
        return bytes(buffer)
