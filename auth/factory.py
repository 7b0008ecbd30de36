"""
Auth Factory

Builds a SessionManager wired to the configured authorization server.
Follows the same pattern as upload/factory.py.
"""

import logging
from typing import TYPE_CHECKING, Literal, Optional

from auth.controllers.session_manager import SessionManager
from auth.device_flow_client import DeviceFlowClient
from auth.implementations.file_token_store import FileTokenStore
from auth.implementations.mock_token_store import MockTokenStore
from auth.interfaces.token_store_interface import TokenStoreInterface

if TYPE_CHECKING:
    from core.shared_state import SharedState

# Type alias
TokenStoreMode = Literal["file", "mock"]

_logger = logging.getLogger(__name__)


def create_token_store(mode: TokenStoreMode = "file") -> TokenStoreInterface:
    """
    Create a token store.

    Args:
        mode: "file" (per-user JSON file) or "mock" (in memory)
    """
    if mode == "mock":
        _logger.info("Creating Mock Token Store (forced)")
        return MockTokenStore()
    return FileTokenStore()


def create_session_manager(
    shared_state: Optional["SharedState"] = None,
    token_store: Optional[TokenStoreInterface] = None,
    client: Optional[DeviceFlowClient] = None,
) -> SessionManager:
    """
    Create a session manager from configuration.

    Args:
        shared_state: Where to publish credential and AuthState (optional)
        token_store: Override the credential store
        client: Override the device flow client

    Example:
        state = SharedState()
        manager = create_session_manager(state)
        threading.Thread(target=manager.authenticate, daemon=True).start()
    """
    return SessionManager(
        client=client or DeviceFlowClient(),
        token_store=token_store or create_token_store(),
        credential_state=shared_state.credential if shared_state else None,
        auth_state=shared_state.auth_state if shared_state else None,
    )
