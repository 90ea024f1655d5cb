"""Entra ID directory adapter."""

from .graph_client import GraphClient, GraphClientConfig
from .repository import EntraIdDirectoryClient

__all__ = [
    "EntraIdDirectoryClient",
    "GraphClient",
    "GraphClientConfig",
]
