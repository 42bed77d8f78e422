"""Shared pytest fixtures for Hegel IP tests."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from custom_components.hegel_ip.connection import ConnectionState, HegelConnection
from custom_components.hegel_ip.const import (
    CONF_DEBUG,
    CONF_INPUT_OPTICAL3_COMMAND,
    CONF_INPUT_USB_COMMAND,
    CONF_POWER_OFF_COMMAND,
    CONF_POWER_ON_COMMAND,
    CONF_TIMEOUT_MS,
)
from custom_components.hegel_ip.coordinator import (
    HegelCoordinator,
    HegelCoordinatorConfig,
)


@pytest.fixture
def mock_hass() -> MagicMock:
    """Create a mock Home Assistant instance."""
    hass = MagicMock(spec=HomeAssistant)
    hass.states = MagicMock()
    hass.states.get = MagicMock(return_value=None)
    hass.async_create_task = MagicMock()
    return hass


@pytest.fixture
def mock_config_entry() -> MagicMock:
    """Create a mock config entry."""
    entry = MagicMock(spec=ConfigEntry)
    entry.entry_id = "test_entry_123"
    entry.data = {"host": "192.168.1.50", "port": 50001}
    entry.options = {
        CONF_TIMEOUT_MS: 1500,
        CONF_DEBUG: False,
        CONF_POWER_ON_COMMAND: "-p.1",
        CONF_POWER_OFF_COMMAND: "-p.0",
        CONF_INPUT_OPTICAL3_COMMAND: "-i.10",
        CONF_INPUT_USB_COMMAND: "-i.11",
    }
    entry.title = "Test Hegel"
    entry.runtime_data = None
    return entry


@pytest.fixture
def mock_connection() -> MagicMock:
    """Create a mock HegelConnection."""
    conn = MagicMock(spec=HegelConnection)
    conn.host = "192.168.1.50"
    conn.port = 50001
    conn.timeout = 1.5
    conn.debug = False
    conn.state = ConnectionState.DISCONNECTED
    conn.inbound_buffer = b""
    conn.last_activity = None
    conn.send = AsyncMock()
    conn.ensure_connected = AsyncMock()
    conn.disconnect = AsyncMock()
    conn.close_nowait = MagicMock()
    return conn


@pytest.fixture
def coordinator_config() -> HegelCoordinatorConfig:
    """Return a coordinator config with the default H590 commands."""
    return HegelCoordinatorConfig(host="192.168.1.50", port=50001)


@pytest.fixture
def coordinator(
    coordinator_config: HegelCoordinatorConfig, mock_connection: MagicMock
) -> HegelCoordinator:
    """Create a real HegelCoordinator with a mocked connection."""
    return HegelCoordinator(coordinator_config, connection=mock_connection)


@pytest.fixture
def mock_coordinator(mock_connection: MagicMock) -> MagicMock:
    """Create a mock HegelCoordinator."""
    coord = MagicMock(spec=HegelCoordinator)
    coord.host = "192.168.1.50"
    coord.port = 50001
    coord.connection = mock_connection
    coord.is_on = False
    coord.active_input = "OPTICAL3"
    coord.source_list = ["OPTICAL3", "USB"]
    coord.is_available = True
    coord.async_set_power = AsyncMock()
    coord.async_select_input = AsyncMock()
    coord.disconnect = AsyncMock()
    return coord


def make_stream_writer() -> MagicMock:
    """Create a mock StreamWriter that reports an open transport until aborted."""
    writer = MagicMock(spec=asyncio.StreamWriter)
    writer.write = MagicMock()
    writer.drain = AsyncMock()
    writer.is_closing = MagicMock(return_value=False)
    writer.close = MagicMock()
    writer.wait_closed = AsyncMock()
    writer.get_extra_info = MagicMock(return_value=MagicMock())
    writer.transport = MagicMock()

    def _abort() -> None:
        writer.is_closing.return_value = True

    writer.transport.abort = MagicMock(side_effect=_abort)
    return writer


@pytest.fixture
def mock_stream_writer() -> MagicMock:
    """Create a mock StreamWriter."""
    return make_stream_writer()


@pytest.fixture(autouse=True)
def enable_sockets_for_integration_tests(request: pytest.FixtureRequest) -> None:
    """Enable socket usage for integration tests."""
    if "integration" in str(request.node.fspath):
        import pytest_socket  # noqa: PLC0415

        pytest_socket.enable_socket()
