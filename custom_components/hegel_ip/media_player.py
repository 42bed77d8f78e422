"""MediaPlayer platform for Hegel amplifiers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from homeassistant.components.media_player import (
    MediaPlayerDeviceClass,
    MediaPlayerEntity,
    MediaPlayerEntityFeature,
    MediaPlayerState,
)
from homeassistant.exceptions import HomeAssistantError, ServiceValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

    from .coordinator import HegelCoordinator

from .connection import HegelConnectionError
from .const import DOMAIN

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    _hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up the Hegel media player from a config entry."""
    coordinator: HegelCoordinator = entry.runtime_data
    entity = HegelMediaPlayer(coordinator, entry)
    async_add_entities([entity])
    _LOGGER.debug("Entity added to Home Assistant: %s", entity.unique_id)


class HegelMediaPlayer(MediaPlayerEntity):
    """
    Media player entity representing a Hegel amplifier.

    The amplifier never reports its state, so power and source reflect the
    last command that was sent successfully. Nothing is sent when the
    entity is added, which keeps a Home Assistant restart from switching
    the amplifier.
    """

    _attr_supported_features = (
        MediaPlayerEntityFeature.TURN_ON
        | MediaPlayerEntityFeature.TURN_OFF
        | MediaPlayerEntityFeature.SELECT_SOURCE
    )
    _attr_should_poll = False
    _attr_has_entity_name = True
    _attr_name = None
    _attr_device_class = MediaPlayerDeviceClass.RECEIVER

    def __init__(self, coordinator: HegelCoordinator, entry: ConfigEntry) -> None:
        """Initialize the entity for the given coordinator."""
        self.coordinator = coordinator
        self._attr_unique_id = f"{entry.entry_id}_amplifier"
        self._attr_device_info = {
            "identifiers": {(DOMAIN, entry.entry_id)},
            "name": entry.title,
            "manufacturer": "Hegel",
            "model": "H590",
            "serial_number": coordinator.host,
        }

    @property
    def state(self) -> MediaPlayerState:
        """Return ON or OFF from the last power command."""
        return MediaPlayerState.ON if self.coordinator.is_on else MediaPlayerState.OFF

    @property
    def source(self) -> str | None:
        """Return the last selected input."""
        return self.coordinator.active_input

    @property
    def source_list(self) -> list[str]:
        """Return the selectable inputs."""
        return self.coordinator.source_list

    async def _async_run(self, description: str, command: Awaitable[None]) -> None:
        try:
            await command
        except HegelConnectionError as err:
            raise HomeAssistantError(
                translation_domain=DOMAIN,
                translation_key="command_failed",
                translation_placeholders={"command": description, "error": str(err)},
            ) from err

    async def async_turn_on(self) -> None:
        """Power the amplifier on."""
        _LOGGER.info("Turning ON %s", self.coordinator.host)
        await self._async_run("power on", self.coordinator.async_set_power(on=True))
        self.async_write_ha_state()

    async def async_turn_off(self) -> None:
        """Power the amplifier off."""
        _LOGGER.info("Turning OFF %s", self.coordinator.host)
        await self._async_run("power off", self.coordinator.async_set_power(on=False))
        self.async_write_ha_state()

    async def async_select_source(self, source: str) -> None:
        """Select an input by name."""
        if source not in self.coordinator.source_list:
            raise ServiceValidationError(
                translation_domain=DOMAIN,
                translation_key="unknown_source",
                translation_placeholders={"source": source},
            )
        _LOGGER.info("Selecting source '%s' on %s", source, self.coordinator.host)
        await self._async_run(
            f"select {source}", self.coordinator.async_select_input(source)
        )
        self.async_write_ha_state()
