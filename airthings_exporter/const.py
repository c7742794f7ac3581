"""
Application constants and metadata.
"""

from . import __version__

# Application info
APP_NAME = "Airthings Exporter"
APP_VERSION = __version__

# Metric naming
NAMESPACE = "airthings"
SUBSYSTEM = "cloud"
LABEL_NAMES = ("device", "segment", "location")

# Remote API
DEFAULT_API_URL = "https://ext-api.airthings.com"
DEFAULT_TOKEN_URL = "https://accounts-api.airthings.com/v1/token"
DEFAULT_SCOPES = "read:device:current_values"
DEFAULT_REQUEST_TIMEOUT = 30.0

# Inventory is re-read from the API at most once per TTL
INVENTORY_TTL = 30 * 60.0

# Seconds before expiry at which a cached token is renewed
TOKEN_EXPIRY_LEEWAY = 10.0

# HTTP surface
DEFAULT_LISTEN_ADDRESS = ":9101"
METRICS_PATH = "/metrics"
