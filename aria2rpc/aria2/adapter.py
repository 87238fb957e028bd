"""aria2 naming and credential policy, expressed as client hooks."""

from __future__ import annotations

from typing import Any, Sequence

from aria2rpc.config.schema import ClientConfig
from aria2rpc.rpc.client import ClientHooks

MANAGEMENT_NAMESPACE = "system"
SECRET_PREFIX = "token:"


def prefix(name: str, namespace: str = "aria2") -> str:
    """Put ``name`` in ``namespace`` unless it already is, or is a ``system.`` method."""
    if not namespace:
        return name
    if name.startswith(f"{MANAGEMENT_NAMESPACE}.") or name.startswith(f"{namespace}."):
        return name
    return f"{namespace}.{name}"


def unprefix(name: str, namespace: str = "aria2") -> str:
    """Strip a leading ``<namespace>.``; names without a bare remainder come back unchanged."""
    if not namespace:
        return name
    head = f"{namespace}."
    if name.startswith(head) and len(name) > len(head):
        return name[len(head):]
    return name


def add_secret(params: Sequence[Any], secret: str) -> list[Any]:
    """Prepend ``token:<secret>`` when a secret is configured."""
    if not secret:
        return list(params)
    return [f"{SECRET_PREFIX}{secret}", *params]


def aria2_hooks(config: ClientConfig) -> ClientHooks:
    namespace = config.namespace
    secret = config.secret
    return ClientHooks(
        rewrite_method=lambda method: prefix(method, namespace),
        decorate_params=lambda params: add_secret(params, secret),
        bare_name=lambda name: unprefix(name, namespace),
    )
