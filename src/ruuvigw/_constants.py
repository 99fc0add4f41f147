"""Internal constants shared across the library."""

# Bluetooth assigned numbers
AD_TYPE_MANUFACTURER_DATA = 0xFF

# Company identifier of Ruuvi Innovations Ltd.
RUUVI_MANUFACTURER_ID = 0x0499

# Payload format tags (first byte after the company identifier)
FORMAT_V5 = 0x05
FORMAT_V6 = 0x06
FORMAT_E1 = 0xE1

DEFAULT_PORT = 9000
DEFAULT_INTERFACE = "0.0.0.0"
DEFAULT_LOG_LEVEL = "WARNING"
# Gateways post a few kilobytes at most; 1 MiB leaves plenty of headroom.
MAX_BODY_SIZE = 1024 * 1024

# Response header telling the gateway how often to post (seconds).
GATEWAY_RATE_HEADER = "X-Ruuvi-Gateway-Rate"
GATEWAY_RATE_SECONDS = 1
