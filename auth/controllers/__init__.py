"""
Auth Controllers Package

High-level controllers driving the device flow and credential lifecycle.
"""

from auth.controllers.device_authorization import DeviceAuthorization
from auth.controllers.session_manager import SessionManager

# Public API
__all__ = [
    "DeviceAuthorization",
    "SessionManager",
]
