"""Collect the raw bytes of an error payload received in pieces."""

from __future__ import annotations

import io
from typing import Any, Optional


class ErrorAccumulatorWriteError(Exception):
    """Raised when the underlying buffer refuses a write."""


class ErrorAccumulator:
    """Append error bytes to a buffer and hand them back as one block.

    The buffer must offer ``write(data)`` and ``getvalue()``; an in-memory
    ``io.BytesIO`` is used when none is given.
    """

    def __init__(self, buffer: Optional[Any] = None) -> None:
        self._buffer = buffer if buffer is not None else io.BytesIO()

    def write(self, data: bytes) -> None:
        """Append ``data`` to the accumulated error bytes."""
        try:
            self._buffer.write(data)
        except Exception as exc:
            raise ErrorAccumulatorWriteError(
                f"error accumulator write error, {exc}"
            ) from exc

    def contents(self) -> bytes:
        """Return everything written so far, or ``b""`` if nothing was."""
        value = self._buffer.getvalue()
        if not value:
            return b""
        return bytes(value)