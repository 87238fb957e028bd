"""Error taxonomy for the JSON-RPC client.

- ``TransportError``: the connection failed (refused, dropped, unparseable payload).
- ``ProtocolError``: local misuse detected before anything touches the network.
- ``RpcError``: the server answered a specific request with an error object.
"""

from __future__ import annotations

from typing import Any

from .protocol import RpcErrorPayload


class TransportError(Exception):
    """Connection-level failure."""


class ProtocolError(TypeError):
    """Malformed local usage, e.g. a non-string method name."""


class RpcError(Exception):
    """Server-reported error for one request identifier."""

    def __init__(self, code: Any, message: str, data: Any = None):
        super().__init__(message)
        self._code = code
        self._message = message
        self._data = data

    @property
    def code(self) -> Any:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def data(self) -> Any:
        return self._data

    @classmethod
    def from_payload(cls, error: RpcErrorPayload | Any) -> "RpcError":
        """Build from a decoded error payload or the raw ``error`` member of a response."""
        if not isinstance(error, RpcErrorPayload):
            error = RpcErrorPayload.from_wire(error)
        return cls(error.code, error.message, error.data)

    def __str__(self) -> str:
        if self._data is not None:
            return f"{self._code}: {self._message} ({self._data})"
        return f"{self._code}: {self._message}"

    def __repr__(self) -> str:
        return f"RpcError(code={self._code!r}, message={self._message!r}, data={self._data!r})"
