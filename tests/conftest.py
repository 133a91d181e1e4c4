"""Test configuration for pytest."""

import os
import tempfile
from pathlib import Path

import pytest

from src.ecc_console.models.schemas import DeviceInfo


class RecordingSink:
    """Output sink that keeps every transition record."""

    def __init__(self):
        self.records: list[str] = []

    def __call__(self, text: str) -> None:
        self.records.append(text)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sink():
    """Create a recording output sink."""
    return RecordingSink()


@pytest.fixture
def device():
    """Create a test headset."""
    return DeviceInfo(id="dev-1", name="Test Headset", product_id=0x1234, serial_number="SN001")


@pytest.fixture
def other_device():
    """Create a second test headset."""
    return DeviceInfo(id="dev-2", name="Other Headset", product_id=0x5678, serial_number="SN002")


@pytest.fixture
def keymap_file(temp_dir):
    """Create a keymap YAML file."""
    path = temp_dir / "keymap.yaml"
    path.write_text(
        'keys:\n'
        '  "a": start_call\n'
        '  "e": end_call\n'
        '  "m": mute\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def mock_settings(keymap_file):
    """Create settings from a patched environment."""
    from src.ecc_console.settings import Settings

    test_env = {
        "ECC_PARTNER_KEY": "test-partner-key",
        "ECC_APP_ID": "EccTest",
        "KEYMAP_PATH": str(keymap_file),
        "SIMULATED_DEVICES": "Headset A, Headset B",
    }

    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    try:
        settings = Settings()
        yield settings
    finally:
        for key, value in original_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
