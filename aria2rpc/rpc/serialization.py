"""Serialization helpers for JSON-RPC frames."""

from __future__ import annotations

import json
from typing import Any, Sequence

from .protocol import RpcErrorPayload, RpcNotification, RpcRequest, RpcResponse

Outbound = RpcRequest | RpcNotification


def to_wire(message: Outbound | Sequence[Outbound]) -> Any:
    """Convert one message, or a batch of them, to plain JSON-able data."""
    if isinstance(message, (RpcRequest, RpcNotification)):
        return message.to_wire()
    return [item.to_wire() for item in message]


def encode_frame(payload: Any) -> str:
    """Encode wire data (object or batch array) as one JSON text frame."""
    return json.dumps(payload, ensure_ascii=False)


def decode_frame(raw: str | bytes) -> Any:
    """Decode one inbound frame; raises ``ValueError`` on malformed JSON."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    return json.loads(raw)


def decode_params(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def decode_response(payload: dict[str, Any]) -> RpcResponse:
    """Decode a response object; a non-null ``error`` member wins over ``result``, even when empty."""
    error = payload.get("error")
    if error is not None:
        return RpcResponse(id=payload.get("id"), error=RpcErrorPayload.from_wire(error))
    return RpcResponse(id=payload.get("id"), result=payload.get("result"))
