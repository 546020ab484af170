"""High-level clients."""

from .server_client import ServerClient

__all__ = ["ServerClient"]
