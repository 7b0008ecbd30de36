"""
Credential Model Tests

Tests for auth.models showing:
- Expiry margin boundary (300 s)
- Credential persistence shape
- Device session parsing
- Token endpoint reply classification

To run:
    pytest tests/auth/test_credential_models.py -v
"""

import pytest

from auth.errors import InvalidResponseError
from auth.models import (
    Credential,
    DeviceSession,
    TokenErrorReply,
    TokenGrant,
    parse_token_response,
)

NOW = 1_700_000_000

# =============================================================================
# EXPIRY TESTS
# =============================================================================


@pytest.mark.unit
def test_credential_with_300_seconds_left_is_valid():
    """Exactly the margin left is still usable."""
    credential = Credential(access_token="a", expires_at=NOW + 300)

    assert credential.is_expired(now=NOW) is False


@pytest.mark.unit
def test_credential_with_299_seconds_left_is_expired():
    """One second inside the margin counts as expired."""
    credential = Credential(access_token="a", expires_at=NOW + 299)

    assert credential.is_expired(now=NOW) is True


@pytest.mark.unit
@pytest.mark.parametrize(
    "now, expired",
    [(NOW + 0.5, True), (NOW + 0.0, False), (NOW - 0.25, False)],
)
def test_expiry_margin_uses_fractional_clock(now, expired):
    """299.5 s left is already inside the margin."""
    credential = Credential(access_token="a", expires_at=NOW + 300)

    assert credential.is_expired(now=now) is expired


@pytest.mark.unit
def test_credential_past_expiry_reports_zero_remaining():
    credential = Credential(access_token="a", expires_at=NOW - 50)

    assert credential.seconds_remaining(now=NOW) == 0
    assert credential.is_expired(now=NOW) is True


@pytest.mark.unit
def test_issued_computes_expires_at_from_issue_time():
    credential = Credential.issued("a", expires_in=3600, now=NOW)

    assert credential.expires_at == NOW + 3600
    assert credential.expires_in == 3600
    assert credential.token_type == "Bearer"


# =============================================================================
# PERSISTENCE SHAPE TESTS
# =============================================================================


@pytest.mark.unit
def test_credential_dict_round_trip():
    credential = Credential.issued(
        "access",
        expires_in=600,
        refresh_token="refresh",
        id_token="id",
        now=NOW,
    )

    restored = Credential.from_dict(credential.to_dict())

    assert restored == credential


@pytest.mark.unit
def test_from_dict_requires_access_token():
    with pytest.raises(KeyError):
        Credential.from_dict({"refresh_token": "r"})


@pytest.mark.unit
def test_repr_hides_token_material():
    credential = Credential("secret-access", refresh_token="secret-refresh")

    text = repr(credential)

    assert "secret-access" not in text
    assert "secret-refresh" not in text
    assert "has_refresh_token=True" in text


@pytest.mark.unit
def test_with_refresh_token_returns_new_credential():
    credential = Credential("a")

    updated = credential.with_refresh_token("r")

    assert updated.refresh_token == "r"
    assert credential.refresh_token == ""
    assert updated.can_refresh is True


# =============================================================================
# DEVICE SESSION TESTS
# =============================================================================


@pytest.mark.unit
def test_device_session_from_response(device_code_reply):
    session = DeviceSession.from_response(device_code_reply, now=NOW)

    assert session.device_code == "dev-123"
    assert session.user_code == "ABCD-EFGH"
    assert session.interval == 5
    assert session.expires_at == NOW + 900


@pytest.mark.unit
def test_device_session_prefers_complete_uri(device_code_reply):
    session = DeviceSession.from_response(device_code_reply, now=NOW)

    assert session.display_uri.endswith("?user_code=ABCD-EFGH")


@pytest.mark.unit
def test_device_session_falls_back_to_plain_uri(device_code_reply):
    del device_code_reply["verification_uri_complete"]

    session = DeviceSession.from_response(device_code_reply, now=NOW)

    assert session.display_uri == "https://auth.test/activate"


@pytest.mark.unit
def test_device_session_missing_field_is_invalid(device_code_reply):
    del device_code_reply["user_code"]

    with pytest.raises(InvalidResponseError):
        DeviceSession.from_response(device_code_reply, now=NOW)


@pytest.mark.unit
def test_device_session_expiry_is_inclusive(device_code_reply):
    session = DeviceSession.from_response(device_code_reply, now=NOW)

    assert session.is_expired(now=NOW + 899) is False
    assert session.is_expired(now=NOW + 900) is True


# =============================================================================
# TOKEN REPLY PARSING TESTS
# =============================================================================


@pytest.mark.unit
def test_reply_with_access_token_is_grant(token_reply):
    reply = parse_token_response(token_reply)

    assert isinstance(reply, TokenGrant)
    assert reply.access_token == "access-1"


@pytest.mark.unit
def test_access_token_wins_over_error_field(token_reply):
    token_reply["error"] = "ignored"

    assert isinstance(parse_token_response(token_reply), TokenGrant)


@pytest.mark.unit
def test_reply_with_error_is_error_reply():
    reply = parse_token_response(
        {"error": "invalid_grant", "error_description": "Bad refresh token"},
    )

    assert isinstance(reply, TokenErrorReply)
    assert reply.message == "Bad refresh token"


@pytest.mark.unit
def test_error_reply_message_falls_back_to_code():
    reply = parse_token_response({"error": "invalid_grant"})

    assert reply.message == "invalid_grant"


@pytest.mark.unit
@pytest.mark.parametrize("payload", [{}, {"foo": 1}, [], "text", None])
def test_reply_of_neither_shape_is_invalid(payload):
    with pytest.raises(InvalidResponseError):
        parse_token_response(payload)


@pytest.mark.unit
def test_grant_without_expires_in_is_invalid():
    with pytest.raises(InvalidResponseError):
        parse_token_response({"access_token": "a"})
