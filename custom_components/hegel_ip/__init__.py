"""The Hegel IP integration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from homeassistant.const import CONF_HOST, CONF_PORT, EVENT_HOMEASSISTANT_STOP
from homeassistant.helpers import config_validation as cv

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import Event, HomeAssistant

from .const import (
    CONF_DEBUG,
    CONF_INPUT_OPTICAL3_COMMAND,
    CONF_INPUT_USB_COMMAND,
    CONF_POWER_OFF_COMMAND,
    CONF_POWER_ON_COMMAND,
    CONF_TIMEOUT_MS,
    DEFAULT_DEBUG,
    DEFAULT_INPUT_OPTICAL3_COMMAND,
    DEFAULT_INPUT_USB_COMMAND,
    DEFAULT_PORT,
    DEFAULT_POWER_OFF_COMMAND,
    DEFAULT_POWER_ON_COMMAND,
    DEFAULT_TIMEOUT_MS,
    DOMAIN,
)
from .coordinator import HegelCoordinator, HegelCoordinatorConfig

PLATFORMS = ["media_player"]

_LOGGER = logging.getLogger(__name__)

# This integration is config-entry only; no YAML configuration
CONFIG_SCHEMA = cv.config_entry_only_config_schema(DOMAIN)


def _coordinator_config(entry: ConfigEntry) -> HegelCoordinatorConfig:
    """Build the coordinator config from entry data and options."""
    opts = entry.options
    return HegelCoordinatorConfig(
        host=entry.data[CONF_HOST],
        port=entry.data.get(CONF_PORT, DEFAULT_PORT),
        timeout_ms=opts.get(CONF_TIMEOUT_MS, DEFAULT_TIMEOUT_MS),
        debug=opts.get(CONF_DEBUG, DEFAULT_DEBUG),
        power_on_command=opts.get(CONF_POWER_ON_COMMAND, DEFAULT_POWER_ON_COMMAND),
        power_off_command=opts.get(CONF_POWER_OFF_COMMAND, DEFAULT_POWER_OFF_COMMAND),
        input_optical3_command=opts.get(
            CONF_INPUT_OPTICAL3_COMMAND, DEFAULT_INPUT_OPTICAL3_COMMAND
        ),
        input_usb_command=opts.get(CONF_INPUT_USB_COMMAND, DEFAULT_INPUT_USB_COMMAND),
    )


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up a Hegel amplifier from a config entry."""
    coordinator = HegelCoordinator(_coordinator_config(entry))
    entry.runtime_data = coordinator

    async def _async_stop(_event: Event) -> None:
        await coordinator.disconnect()

    entry.async_on_unload(
        hass.bus.async_listen_once(EVENT_HOMEASSISTANT_STOP, _async_stop)
    )
    # Reload so a new timeout or command set takes effect
    entry.async_on_unload(entry.add_update_listener(_update_listener))
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    return True


async def _update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options updates by reloading the entry."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry and drop the connection."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        coordinator: HegelCoordinator = entry.runtime_data
        try:
            await coordinator.disconnect()
        except Exception:
            _LOGGER.exception("Error disconnecting from Hegel amplifier")
    return unload_ok
