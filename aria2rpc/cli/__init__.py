"""Command line interface for aria2rpc."""
