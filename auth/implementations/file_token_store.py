"""
File Token Store

Stores the credential as one pretty-printed JSON object at a fixed per-user
path (default: ~/.talka_tokens.json).
"""

import json
import logging
from pathlib import Path
from typing import Optional

from auth.interfaces.token_store_interface import TokenStoreError, TokenStoreInterface
from auth.models import Credential
from config.settings import TOKEN_FILE_PATH


class FileTokenStore(TokenStoreInterface):
    """
    JSON file credential store.

    Usage:
        store = FileTokenStore()
        store.save(credential)
        credential = store.load()  # None if missing or corrupt
    """

    def __init__(self, token_path: Path = TOKEN_FILE_PATH):
        self.logger = logging.getLogger(__name__)
        self.token_path = Path(token_path)

    def load(self) -> Optional[Credential]:
        if not self.token_path.exists():
            self.logger.debug(f"No token file at {self.token_path}")
            return None

        try:
            data = json.loads(self.token_path.read_text(encoding="utf-8"))
            credential = Credential.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            # Corrupt or unreadable - behave as if never logged in
            self.logger.warning(f"Ignoring unreadable token file: {e}")
            return None

        self.logger.debug("Credential loaded from token file")
        return credential

    def save(self, credential: Credential) -> None:
        try:
            self.token_path.parent.mkdir(parents=True, exist_ok=True)

            # Atomic write (write to temp file, then rename)
            tmp_file = self.token_path.with_suffix(".tmp")
            tmp_file.write_text(
                json.dumps(credential.to_dict(), indent=2),
                encoding="utf-8",
            )
            tmp_file.replace(self.token_path)
        except OSError as e:
            raise TokenStoreError(
                f"Failed to save credential to {self.token_path}: {e}",
            ) from e

        self.logger.debug(f"Credential saved to {self.token_path}")

    def delete(self) -> None:
        try:
            self.token_path.unlink(missing_ok=True)
        except OSError as e:
            raise TokenStoreError(
                f"Failed to delete {self.token_path}: {e}",
            ) from e

        self.logger.info("Stored credential deleted")
