"""
Token Store Interface

Abstract interface for durable credential persistence.
High-level code (SessionManager) depends on this abstraction, not on the
JSON file on disk, so tests can swap in MockTokenStore.
"""

from abc import ABC, abstractmethod
from typing import Optional

from auth.models import Credential


class TokenStoreInterface(ABC):
    """
    Persists exactly one credential record.

    Contract:
    - load() never raises: absence or corruption means "no credential"
    - save()/delete() raise TokenStoreError on filesystem failure; callers
      treat that as non-fatal
    """

    @abstractmethod
    def load(self) -> Optional[Credential]:
        """
        Read the persisted credential.

        Returns:
            Credential, or None if missing or unreadable
        """

    @abstractmethod
    def save(self, credential: Credential) -> None:
        """
        Persist a credential, replacing any previous one.

        Raises:
            TokenStoreError: If the record cannot be written
        """

    @abstractmethod
    def delete(self) -> None:
        """
        Remove the persisted credential (logout).

        Deleting a missing record is not an error.

        Raises:
            TokenStoreError: If the record exists but cannot be removed
        """


class TokenStoreError(Exception):
    """Local filesystem failure while persisting credentials"""
