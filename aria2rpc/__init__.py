"""
aria2rpc - JSON-RPC client for aria2 over WebSocket or HTTP.
"""

__version__ = "0.1.0"

from aria2rpc.aria2 import Aria2Client
from aria2rpc.config import Aria2Config, ClientConfig, load_config
from aria2rpc.rpc import (
    ClientHooks,
    CloseEvent,
    ErrorEvent,
    InputEvent,
    JsonRpcClient,
    NotificationEvent,
    OpenEvent,
    OutputEvent,
    ProtocolError,
    RpcError,
    TransportError,
)

__all__ = [
    "__version__",
    "Aria2Client",
    "JsonRpcClient",
    "ClientHooks",
    "Aria2Config",
    "ClientConfig",
    "load_config",
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
