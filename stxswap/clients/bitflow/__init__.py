"""Bitflow quoting-service client."""

from stxswap.clients.bitflow.client import BitflowClient, BitflowError, NoRouteFoundError

__all__ = ["BitflowClient", "BitflowError", "NoRouteFoundError"]
