"""
Auth Module

OAuth2 Device Authorization Grant session for the recorder.

Public API:
    - SessionManager: Credential lifecycle (load, refresh, re-authenticate)
    - DeviceFlowClient: Device-code, poll and refresh HTTP exchanges
    - DeviceAuthorization: Polling state machine
    - Credential / DeviceSession: Data models
    - AuthState / AuthStage: UI-facing session state
    - create_session_manager: Factory function

Usage:
    from auth import create_session_manager

    manager = create_session_manager(shared_state)
    credential = manager.get_valid_credential()
"""

from auth.constants import AuthStage, AuthState, DeviceFlowState, PollOutcome
from auth.controllers.device_authorization import DeviceAuthorization
from auth.controllers.session_manager import SessionManager
from auth.device_flow_client import DeviceFlowClient
from auth.errors import (
    AccessDeniedError,
    AuthError,
    ExpiredTokenError,
    InvalidResponseError,
    InvalidTokenError,
    NetworkError,
    UnknownAuthError,
)
from auth.factory import create_session_manager, create_token_store
from auth.models import Credential, DeviceSession, PollResult

# Public API
__all__ = [
    "AccessDeniedError",
    "AuthError",
    "AuthStage",
    "AuthState",
    "Credential",
    "DeviceAuthorization",
    "DeviceFlowClient",
    "DeviceFlowState",
    "DeviceSession",
    "ExpiredTokenError",
    "InvalidResponseError",
    "InvalidTokenError",
    "NetworkError",
    "PollOutcome",
    "PollResult",
    "SessionManager",
    "UnknownAuthError",
    "create_session_manager",
    "create_token_store",
]
