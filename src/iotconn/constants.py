"""
Global constants for iotconn.
"""

# Connection string grammar
VALUE_PAIR_DELIMITER = ";"
VALUE_PAIR_SEPARATOR = "="
HOST_NAME_SEPARATOR = "."

# Upper bound for a single pattern evaluation
REGEX_TIMEOUT_SECONDS = 0.5

# Shared access signature tokens
SHARED_ACCESS_SIGNATURE_PREFIX = "SharedAccessSignature"
SAS_AUDIENCE_FIELD = "sr"
SAS_SIGNATURE_FIELD = "sig"
SAS_EXPIRY_FIELD = "se"
SAS_KEY_NAME_FIELD = "skn"

# Security types accepted from the sample parameter loader
SECURITY_TYPE_DPS = "dps"
SECURITY_TYPE_CONNECTION_STRING = "connectionstring"

# Environment variables read by the CLI (never by the core)
ENV_DEVICE_SECURITY_TYPE = "IOTHUB_DEVICE_SECURITY_TYPE"
ENV_DEVICE_CONNECTION_STRING = "IOTHUB_DEVICE_CONNECTION_STRING"
ENV_DPS_ENDPOINT = "IOTHUB_DEVICE_DPS_ENDPOINT"
ENV_DPS_ID_SCOPE = "IOTHUB_DEVICE_DPS_ID_SCOPE"
ENV_DPS_DEVICE_ID = "IOTHUB_DEVICE_DPS_DEVICE_ID"
ENV_DPS_DEVICE_KEY = "IOTHUB_DEVICE_DPS_DEVICE_KEY"

# Logging constants
LOG_APP_NAME = "IOTCONN"
LOG_FILE_NAME = "iotconn"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20
