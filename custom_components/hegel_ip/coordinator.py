"""
Coordinator for Hegel IP.

Maps user intents (power, input selection) onto the configured command
strings and keeps "last-command-wins" state for a write-only device:
- State only changes after the command was handed to the transport
- Connection errors mark the coordinator unavailable and propagate
- No internal retries; the next command reconnects on its own
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .connection import HegelConnection, HegelConnectionError
from .const import (
    DEFAULT_DEBUG,
    DEFAULT_INPUT_OPTICAL3_COMMAND,
    DEFAULT_INPUT_USB_COMMAND,
    DEFAULT_PORT,
    DEFAULT_POWER_OFF_COMMAND,
    DEFAULT_POWER_ON_COMMAND,
    DEFAULT_TIMEOUT_MS,
    INPUT_OPTICAL3,
    INPUT_USB,
)

_LOGGER = logging.getLogger(__name__)


@dataclass
class HegelCoordinatorConfig:
    """Connection settings and command strings for one amplifier."""

    host: str
    port: int = DEFAULT_PORT
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    debug: bool = DEFAULT_DEBUG
    power_on_command: str = DEFAULT_POWER_ON_COMMAND
    power_off_command: str = DEFAULT_POWER_OFF_COMMAND
    input_optical3_command: str = DEFAULT_INPUT_OPTICAL3_COMMAND
    input_usb_command: str = DEFAULT_INPUT_USB_COMMAND


class HegelCoordinator:
    """Optimistic command front-end for a single Hegel amplifier."""

    def __init__(
        self,
        config: HegelCoordinatorConfig,
        *,
        connection: HegelConnection | None = None,
    ) -> None:
        """Initialize the coordinator; no traffic is sent until a command."""
        self._config = config
        self._conn = connection or HegelConnection(
            config.host,
            config.port,
            timeout=config.timeout_ms / 1000,
            debug=config.debug,
            log=_LOGGER.info,
            warn=_LOGGER.warning,
        )
        self._input_commands: dict[str, str] = {
            INPUT_OPTICAL3: config.input_optical3_command,
            INPUT_USB: config.input_usb_command,
        }
        self._is_on = False
        self._active_input = INPUT_OPTICAL3
        self._available = True

    @property
    def host(self) -> str:
        """Return the configured host."""
        return self._config.host

    @property
    def port(self) -> int:
        """Return the configured port."""
        return self._config.port

    @property
    def connection(self) -> HegelConnection:
        """Return the underlying connection manager."""
        return self._conn

    @property
    def is_on(self) -> bool:
        """Return the last power state that was successfully sent."""
        return self._is_on

    @property
    def active_input(self) -> str:
        """Return the last input that was successfully selected."""
        return self._active_input

    @property
    def source_list(self) -> list[str]:
        """Return the selectable input names."""
        return list(self._input_commands)

    @property
    def is_available(self) -> bool:
        """Return False while the most recent command failed on the transport."""
        return self._available

    def _set_available(self, *, available: bool) -> None:
        if available == self._available:
            return
        self._available = available
        if available:
            _LOGGER.info("Hegel amplifier at %s is reachable again", self.host)
        else:
            _LOGGER.warning("Hegel amplifier at %s is unreachable", self.host)

    async def _send(self, command: str) -> None:
        try:
            await self._conn.send(command)
        except HegelConnectionError:
            self._set_available(available=False)
            raise
        self._set_available(available=True)

    async def async_set_power(self, *, on: bool) -> None:
        """Send the power command and record the requested state."""
        cmd = self._config.power_on_command if on else self._config.power_off_command
        await self._send(cmd)
        self._is_on = on
        _LOGGER.info("Power command sent: %s", "ON" if on else "OFF")

    async def async_select_input(self, name: str) -> None:
        """Send the command for the named input and record it as active."""
        cmd = self._input_commands.get(name)
        if cmd is None:
            msg = f"Unknown input: {name}"
            raise ValueError(msg)
        await self._send(cmd)
        self._active_input = name
        _LOGGER.info("Input command sent: %s", name)

    async def disconnect(self) -> None:
        """Disconnect from the device."""
        await self._conn.disconnect()
