"""Unit tests for strings.json and its English translation."""

import json
from pathlib import Path

import pytest

COMPONENT_DIR = Path(__file__).parent.parent.parent / "custom_components" / "hegel_ip"


def _load(relative: str) -> dict:
    with (COMPONENT_DIR / relative).open(encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(params=["strings.json", "translations/en.json"])
def strings(request: pytest.FixtureRequest) -> dict:
    """Load each string table."""
    return _load(request.param)


class TestTranslations:
    """Test translation keys used by the integration exist."""

    def test_exception_keys(self, strings: dict) -> None:
        """Test the exceptions raised by the media player are translated."""
        exceptions = strings["exceptions"]
        assert "{command}" in exceptions["command_failed"]["message"]
        assert "{error}" in exceptions["command_failed"]["message"]
        assert "{source}" in exceptions["unknown_source"]["message"]

    def test_config_flow_keys(self, strings: dict) -> None:
        """Test config and options flow fields and errors are translated."""
        assert set(strings["config"]["step"]["user"]["data"]) == {
            "name",
            "host",
            "port",
        }
        assert "invalid_host" in strings["config"]["error"]
        assert "already_configured" in strings["config"]["abort"]
        assert set(strings["options"]["step"]["init"]["data"]) == {
            "timeout_ms",
            "debug",
            "power_on_command",
            "power_off_command",
            "input_optical3_command",
            "input_usb_command",
        }
        assert "empty_command" in strings["options"]["error"]

    def test_english_matches_strings(self) -> None:
        """Test translations/en.json is in sync with strings.json."""
        assert _load("translations/en.json") == _load("strings.json")
