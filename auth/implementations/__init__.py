"""
Auth Implementations Package

Concrete token stores (file-backed and mock).
"""

from auth.implementations.file_token_store import FileTokenStore
from auth.implementations.mock_token_store import MockTokenStore

__all__ = ["FileTokenStore", "MockTokenStore"]
