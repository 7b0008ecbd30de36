"""
Auth Interfaces Package

Exposes abstract interfaces for authentication components.
"""

from auth.interfaces.token_store_interface import TokenStoreError, TokenStoreInterface

# Public API
__all__ = [
    "TokenStoreError",
    "TokenStoreInterface",
]
