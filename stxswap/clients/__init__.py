"""
HTTP clients for the swap collaborators.
"""
from stxswap.clients.base_client import BaseHTTPClient, HTTPClientError

__all__ = ["BaseHTTPClient", "HTTPClientError"]
