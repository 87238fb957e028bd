"""aria2 RPC client: the generic client composed with aria2 hooks."""

from __future__ import annotations

from typing import Any, Callable

import httpx

from aria2rpc.config.schema import Aria2Config, ClientConfig
from aria2rpc.rpc.client import JsonRpcClient, RequestHandler

from .adapter import aria2_hooks


class Aria2Client(JsonRpcClient):
    """Talks to an aria2 daemon.

    Method names get the ``aria2.`` prefix (``system.*`` excepted), every
    call, batch member and multicall member carries ``token:<secret>`` when a
    secret is configured, and notifications are emitted both as
    ``aria2.onDownloadStart`` and ``onDownloadStart``.

    Example::

        async with Aria2Client(Aria2Config(secret="s3cret")) as aria2:
            aria2.on("onDownloadComplete", print)
            gid = await aria2.call("addUri", ["https://example.com/file.iso"])
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        on_request: RequestHandler | None = None,
        http_client: httpx.AsyncClient | None = None,
        ws_connect: Callable[..., Any] | None = None,
    ):
        config = config or Aria2Config()
        super().__init__(
            config,
            hooks=aria2_hooks(config),
            on_request=on_request,
            http_client=http_client,
            ws_connect=ws_connect,
        )
