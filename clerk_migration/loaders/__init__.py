"""Loaders for the target identity provider."""

from .base import BaseLoader
from .clerk_loader import ClerkLoader

__all__ = [
    "BaseLoader",
    "ClerkLoader",
]
