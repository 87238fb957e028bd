"""JSON-RPC client core: message models, transports and id correlation."""

from aria2rpc.rpc.client import ClientHooks, JsonRpcClient
from aria2rpc.rpc.errors import ProtocolError, RpcError, TransportError
from aria2rpc.rpc.events import (
    CloseEvent,
    ErrorEvent,
    EventBus,
    InputEvent,
    NotificationEvent,
    OpenEvent,
    OutputEvent,
)
from aria2rpc.rpc.registry import CompletionRegistry

__all__ = [
    "JsonRpcClient",
    "ClientHooks",
    "CompletionRegistry",
    "EventBus",
    "OpenEvent",
    "CloseEvent",
    "ErrorEvent",
    "OutputEvent",
    "InputEvent",
    "NotificationEvent",
    "RpcError",
    "ProtocolError",
    "TransportError",
]
