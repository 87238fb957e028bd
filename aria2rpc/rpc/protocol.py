"""JSON-RPC message models shared by the client and its transports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

JSONRPC_VERSION = "2.0"


@dataclass(slots=True)
class RpcErrorPayload:
    """Error member of a response object."""

    code: Any
    message: str
    data: Any = None

    @classmethod
    def from_wire(cls, error: Any) -> "RpcErrorPayload":
        """Normalise a wire error member; missing fields get defaults."""
        row = error if isinstance(error, dict) else {}
        return cls(
            code=row.get("code"),
            message=str(row.get("message") or "rpc failed"),
            data=row.get("data"),
        )


@dataclass(slots=True)
class RpcRequest:
    """Request frame; expects exactly one response with the same id."""

    id: int
    method: str
    params: list[Any] = field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        message: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": self.method, "id": self.id}
        if self.params:
            message["params"] = self.params
        return message


@dataclass(slots=True)
class RpcNotification:
    """Request frame without an id; never answered."""

    method: str
    params: list[Any] = field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        message: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": self.method}
        if self.params:
            message["params"] = self.params
        return message


@dataclass(slots=True)
class RpcResponse:
    """Response frame carrying either a result or an error."""

    id: Any
    result: Any = None
    error: RpcErrorPayload | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MessageKind(str, Enum):
    RESPONSE = "response"
    NOTIFICATION = "notification"
    REQUEST = "request"
    INVALID = "invalid"


def _valid_id(value: Any) -> bool:
    return value is None or isinstance(value, (int, str))


def classify(obj: Any) -> MessageKind:
    """Classify one inbound object by which of ``method`` and ``id`` it carries.

    Non-objects, non-string methods and ids that are not int, str or null are
    ``INVALID``.
    """
    if not isinstance(obj, dict) or not _valid_id(obj.get("id")):
        return MessageKind.INVALID
    if "method" not in obj:
        return MessageKind.RESPONSE
    if not isinstance(obj["method"], str):
        return MessageKind.INVALID
    if "id" not in obj:
        return MessageKind.NOTIFICATION
    return MessageKind.REQUEST
