"""Shared pytest configuration and fixtures for the iotconn test suite.

This module provides:
- Common connection strings and signature tokens
- Isolation of the user config and log directories
- Test configuration (paths, markers)
"""
import sys
from pathlib import Path

import pytest


# Add src/ to path so test modules can import the iotconn package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


# Far-future expiry (2100-01-01T00:00:00Z) so tokens stay valid
FUTURE_EXPIRY = 4102444800

SERVICE_KEY = "QUJDRA=="
SERVICE_CONNECTION_STRING = (
    "HostName=foo.azure-devices.net;SharedAccessKeyName=iothubowner;"
    f"SharedAccessKey={SERVICE_KEY}"
)
SIGNATURE_TOKEN = (
    "SharedAccessSignature sr=foo.azure-devices.net&sig=c2lnbmF0dXJl%3D"
    f"&se={FUTURE_EXPIRY}&skn=iothubowner"
)
DEVICE_CONNECTION_STRING = (
    f"HostName=foo.azure-devices.net;DeviceId=dev1;SharedAccessKey={SERVICE_KEY}"
)


@pytest.fixture(autouse=True)
def isolated_user_dirs(tmp_path, monkeypatch):
    """Keep settings and log files out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def service_connection_string():
    return SERVICE_CONNECTION_STRING


@pytest.fixture
def device_connection_string():
    return DEVICE_CONNECTION_STRING


@pytest.fixture
def signature_token():
    return SIGNATURE_TOKEN


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "commands" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
