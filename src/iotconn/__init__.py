"""
IoT hub connection-string credentials.

Parses service and device connection strings into validated, immutable
descriptors and resolves the authentication method they describe.
"""

__version__ = "1.0.0"
