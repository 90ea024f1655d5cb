"""Domain services - Stateless operations on domain objects."""

from .expiration_scanner import ExpirationScanner

__all__ = ["ExpirationScanner"]
