"""
Auth Test Configuration and Fixtures

Shared fixtures for authentication tests.
"""

import pytest

from auth.controllers.session_manager import SessionManager
from auth.device_flow_client import DeviceFlowClient
from auth.implementations.mock_token_store import MockTokenStore

DEVICE_CODE_URL = "https://auth.test/oauth/device/code"
TOKEN_URL = "https://auth.test/oauth/token"

# =============================================================================
# SERVER REPLIES
# =============================================================================


@pytest.fixture
def device_code_reply():
    """Device-code endpoint success body (5 s interval, 15 min lifetime)."""
    return {
        "device_code": "dev-123",
        "user_code": "ABCD-EFGH",
        "verification_uri": "https://auth.test/activate",
        "verification_uri_complete": "https://auth.test/activate?user_code=ABCD-EFGH",
        "expires_in": 900,
        "interval": 5,
    }


@pytest.fixture
def token_reply():
    """Token endpoint success body."""
    return {
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "id_token": "id-1",
        "token_type": "Bearer",
        "expires_in": 3600,
    }


# =============================================================================
# CLIENT / MANAGER FIXTURES
# =============================================================================


@pytest.fixture
def flow_client(fake_http, clock):
    """
    Provide DeviceFlowClient wired to the fake HTTP session and clock.

    Usage:
        def test_poll(flow_client, fake_http):
            fake_http.reply(400, {"error": "authorization_pending"})
            flow_client.poll_token("dev-123")
    """
    return DeviceFlowClient(
        client_id="test-client",
        client_secret="",
        audience="https://api.test",
        scope="openid offline_access",
        device_code_url=DEVICE_CODE_URL,
        token_url=TOKEN_URL,
        http=fake_http,
        clock=clock,
    )


@pytest.fixture
def token_store():
    """Provide an empty MockTokenStore."""
    return MockTokenStore()


@pytest.fixture
def session_manager(flow_client, token_store, shared_state, clock):
    """Provide SessionManager publishing into shared_state, never sleeping."""
    return SessionManager(
        client=flow_client,
        token_store=token_store,
        credential_state=shared_state.credential,
        auth_state=shared_state.auth_state,
        sleep=clock.sleep,
        clock=clock,
    )
