"""HTTP constants for the request execution layer.

Centralizes status code ranges and default durations used across modules.
"""

# HTTP Status Codes
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CLIENT_ERROR_MAX = 500
HTTP_STATUS_SERVER_ERROR = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600

# Durations (seconds)
DEFAULT_REQUEST_TIMEOUT_SECONDS = 120.0
DEFAULT_SLA_SECONDS = 180.0
DEFAULT_TRANSPORT_TIMEOUT_SECONDS = 7200.0

# Default header values
DEFAULT_ACCEPT_ENCODING = "br;q=1.0, gzip;q=0.8, deflate;q=0.6"
MAX_ACCEPT_LANGUAGES = 6

# Transport worker pool
DEFAULT_TRANSPORT_WORKERS = 8

# Library identification
COURIER_VERSION = "1.0.0"
