"""Diagnostics support for the Hegel IP integration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.const import CONF_HOST

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from .coordinator import HegelCoordinator


def _connection_data(coordinator: HegelCoordinator) -> dict[str, Any]:
    """Summarize the connection manager without exposing the raw bytes."""
    conn = coordinator.connection
    return {
        "state": str(conn.state),
        "timeout": conn.timeout,
        "debug": conn.debug,
        "inbound_bytes": len(conn.inbound_buffer),
        "last_activity": conn.last_activity,
    }


async def async_get_config_entry_diagnostics(
    _hass: HomeAssistant,
    config_entry: ConfigEntry,
) -> dict[str, Any]:
    """
    Return diagnostics for a config entry.

    The host is left out of the entry data so the dump can be shared.
    """
    coordinator: HegelCoordinator | None = config_entry.runtime_data

    diagnostics_data: dict[str, Any] = {
        "config_entry": {
            "title": config_entry.title,
            "entry_id": config_entry.entry_id,
            "data": {k: v for k, v in config_entry.data.items() if k != CONF_HOST},
            "options": dict(config_entry.options),
        },
    }

    if coordinator is not None:
        diagnostics_data["coordinator"] = {
            "port": coordinator.port,
            "available": coordinator.is_available,
            "is_on": coordinator.is_on,
            "active_input": coordinator.active_input,
        }
        diagnostics_data["connection"] = _connection_data(coordinator)

    return diagnostics_data
