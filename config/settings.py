"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Secrets (client secret, API keys) should be in .env, NOT here
- Import these settings in modules: from config.settings import AUTH_DOMAIN
- Protocol constants (grant types, error codes) live in each package's constants.py
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# AUTHENTICATION CONFIGURATION
# =============================================================================

# Authorization server (OAuth2 Device Authorization Grant, RFC 8628)
AUTH_DOMAIN = os.getenv("AUTH_DOMAIN", "login.talka.ai")
AUTH_AUDIENCE = os.getenv("AUTH_AUDIENCE", "https://talka/api")
AUTH_SCOPE = os.getenv("AUTH_SCOPE", "openid profile email offline_access")

# Credential lifetime safety margin (seconds)
# A credential with fewer seconds than this left is treated as expired,
# so no network call starts with a token that expires mid-flight
TOKEN_EXPIRY_MARGIN_SECONDS = 300

# Added to the poll interval every time the server answers "slow_down"
SLOW_DOWN_INCREMENT_SECONDS = 5

# Persisted credential (one JSON object, per-user path)
TOKEN_FILE_PATH = Path(
    os.getenv("TOKEN_FILE_PATH", str(Path.home() / ".talka_tokens.json")),
).expanduser()

# =============================================================================
# UPLOAD CONFIGURATION
# =============================================================================

STORAGE_BASE_URL = os.getenv("STORAGE_BASE_URL", "https://storage.talka.ai")

# "storage" in production; "mock" only for development without the service
UPLOADER_MODE = os.getenv("UPLOADER_MODE", "storage")

# Metadata attached to every uploaded recording
UPLOAD_TITLE_PREFIX = os.getenv("UPLOAD_TITLE_PREFIX", "Recording")
UPLOAD_PROVIDER_TAG = os.getenv("UPLOAD_PROVIDER_TAG", "Talka Cap Pro")
UPLOAD_IS_PRIVATE = os.getenv("UPLOAD_IS_PRIVATE", "false").lower() == "true"

# Link shown to the user once an upload completes
UPLOAD_VIEW_URL_TEMPLATE = os.getenv(
    "UPLOAD_VIEW_URL_TEMPLATE",
    "https://insights.talka.ai/activity/meeting?fileId={file_id}",
)

# HTTP request timeouts (seconds)
HTTP_TIMEOUT = 30  # Auth and metadata calls
UPLOAD_TIMEOUT = 600  # Binary PUT of the whole recording

# How often the upload monitor mirrors pipeline status into shared state
UPLOAD_MONITOR_INTERVAL = 0.2  # seconds

# =============================================================================
# CAPTURE CONFIGURATION
# =============================================================================

# Command loop receive timeout - cooperative polling, not a deadline
COMMAND_POLL_TIMEOUT = 0.05  # seconds (50 ms)

# Capture size used until the source picker reports the real one
DEFAULT_CAPTURE_WIDTH = 1280
DEFAULT_CAPTURE_HEIGHT = 720
CAPTURE_FPS = 60
CAPTURE_SHOWS_CURSOR = True

# Recording output
RECORDINGS_DIR = Path(
    os.getenv("RECORDINGS_DIR", str(Path.home() / "Movies" / "Recordings")),
).expanduser()
RECORDING_FILENAME_FORMAT = "recording_%Y-%m-%d_%H%M%S"
RECORDING_FILE_EXTENSION = "mp4"

# Source name shown when nothing is selected
NO_SOURCE_LABEL = "No source selected"

# Transient notices
LOGIN_NOTICE_SECONDS = 3.0

# =============================================================================
# MEETING EVENTS CONFIGURATION
# =============================================================================

MEETING_EVENTS_INITIAL_DELAY = 2.0  # seconds after startup
MEETING_EVENTS_REFRESH_INTERVAL = 300  # seconds (5 minutes)

# =============================================================================
# SERVICE CONFIGURATION
# =============================================================================

# Remote Control Configuration
# File-based control for triggering commands via SSH/scripts
# Commands: SELECT, CAPTURE, RELEASE, START, STOP, CANCEL, STATUS, QUIT, LOGOUT
CONTROL_FILE = os.getenv(
    "CONTROL_FILE",
    "/tmp/recorder_control.cmd",  # noqa: S108
)

# Main loop rate
SERVICE_LOOP_INTERVAL = 0.1  # seconds (10 Hz)

# Logging Configuration
LOG_DIR = os.path.expanduser(
    os.getenv("LOG_DIR", str(Path.home() / "Library" / "Logs" / "recorder")),
)
LOG_SERVICE_FILE = "service.log"

# =============================================================================
# SECRETS (loaded from .env)
# =============================================================================
# IMPORTANT: These should NEVER be committed to version control!
# Create a .env file in the project root with these values

AUTH_CLIENT_ID = os.getenv("AUTH_CLIENT_ID", "")
AUTH_CLIENT_SECRET = os.getenv("AUTH_CLIENT_SECRET", "")
