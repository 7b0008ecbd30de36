"""
Mock Token Store

In-memory credential store for testing.
Similar to MockCapture/MockUploader: working logic, no disk.
"""

import logging
from typing import List, Optional

from auth.interfaces.token_store_interface import TokenStoreError, TokenStoreInterface
from auth.models import Credential


class MockTokenStore(TokenStoreInterface):
    """
    In-memory token store.

    Usage:
        store = MockTokenStore(credential=existing)
        store.fail_saves = True   # Simulate a read-only disk
    """

    def __init__(self, credential: Optional[Credential] = None):
        self.logger = logging.getLogger(__name__)
        self.credential = credential

        # Test scenario switches
        self.fail_saves = False

        # Track calls for assertions
        self.saved: List[Credential] = []
        self.delete_count = 0

    def load(self) -> Optional[Credential]:
        return self.credential

    def save(self, credential: Credential) -> None:
        if self.fail_saves:
            raise TokenStoreError("[MOCK] Simulated save failure")
        self.credential = credential
        self.saved.append(credential)

    def delete(self) -> None:
        self.credential = None
        self.delete_count += 1
