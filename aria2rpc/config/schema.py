"""Configuration schema using Pydantic.

One immutable value per client: where the endpoint lives, whether to use
TLS, the shared secret and the method namespace. Every field can also be
supplied through ``ARIA2RPC_*`` environment variables.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """Generic JSON-RPC endpoint configuration."""

    host: str = "localhost"
    port: int = 80
    secure: bool = False  # wss:// and https:// instead of ws:// and http://
    path: str = "/jsonrpc"
    secret: str = ""  # Shared secret; empty disables credential injection
    namespace: str = ""  # Default method namespace, e.g. "aria2"

    model_config = SettingsConfigDict(
        env_prefix="ARIA2RPC_",
        frozen=True,
    )

    def url(self, scheme: Literal["ws", "http"]) -> str:
        """Endpoint URL for the WebSocket (``ws``) or HTTP (``http``) transport."""
        suffix = "s" if self.secure else ""
        path = self.path if self.path.startswith("/") else f"/{self.path}"
        return f"{scheme}{suffix}://{self.host}:{self.port}{path}"


class Aria2Config(ClientConfig):
    """aria2 daemon defaults (``--rpc-listen-port`` and the ``aria2.`` namespace)."""

    port: int = 6800
    namespace: str = "aria2"
