"""aria2 protocol adapter."""

from aria2rpc.aria2.adapter import add_secret, aria2_hooks, prefix, unprefix
from aria2rpc.aria2.client import Aria2Client

__all__ = ["Aria2Client", "aria2_hooks", "prefix", "unprefix", "add_secret"]
