"""Public API layer."""

from .client import PagingClient

__all__ = ["PagingClient"]
