"""Configuration constants for the HiLink WebUI client."""

import os

# Endpoint and credentials can also be supplied via HILINK_URL / HILINK_USER /
# HILINK_PASSWORD env vars (see Client.from_env)
DEFAULT_URL = os.environ.get("HILINK_URL", "http://192.168.8.1/")
DEFAULT_USER = os.environ.get("HILINK_USER", "")
DEFAULT_PASSWORD = os.environ.get("HILINK_PASSWORD", "")

DEFAULT_TIMEOUT = 30   # seconds per HTTP request

# Anti-CSRF token travels in this header in both directions
TOKEN_HEADER = "__RequestVerificationToken"

SESSION_COOKIE    = "SessionID"
SESSION_ID_PREFIX = "SessionID="

SES_TOK_INFO_PATH = "api/webserver/SesTokInfo"
LOGIN_PATH        = "api/user/login"

# password_type=4: base64(sha256_hex(password + token)), no padding
PASSWORD_TYPE_SHA256 = 4

REQUEST_ROOT = "request"
REQUEST_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"

# Strict bound on the raw text length of an outgoing SMS
SMS_MAX_LENGTH = 160
SMS_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Error codes the WebUI reports in <error><code>…</code></error> bodies
KNOWN_ERROR_CODES: dict[str, str] = {
    "100002": "not supported by the device",
    "100003": "no permission (login required)",
    "100004": "system busy",
    "100005": "format error",
    "108001": "wrong username",
    "108002": "wrong password",
    "108003": "user already logged in",
    "108006": "wrong username or password",
    "108007": "too many login attempts",
    "113018": "system busy",
    "125001": "wrong token",
    "125002": "wrong session",
    "125003": "wrong session token",
}
