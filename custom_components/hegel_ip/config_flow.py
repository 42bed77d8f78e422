"""
Config flow for Hegel IP: host/port first, command strings as options.

The amplifier never answers, so the flow does not probe the device; the
first command sent opens the connection.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.const import CONF_HOST, CONF_NAME, CONF_PORT
from homeassistant.core import callback

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
    DEFAULT_NAME,
    DEFAULT_PORT,
    DEFAULT_POWER_OFF_COMMAND,
    DEFAULT_POWER_ON_COMMAND,
    DEFAULT_TIMEOUT_MS,
    DOMAIN,
)

MIN_TIMEOUT_MS = 100
MAX_TIMEOUT_MS = 60000

OPTION_DEFAULTS: dict[str, Any] = {
    CONF_TIMEOUT_MS: DEFAULT_TIMEOUT_MS,
    CONF_DEBUG: DEFAULT_DEBUG,
    CONF_POWER_ON_COMMAND: DEFAULT_POWER_ON_COMMAND,
    CONF_POWER_OFF_COMMAND: DEFAULT_POWER_OFF_COMMAND,
    CONF_INPUT_OPTICAL3_COMMAND: DEFAULT_INPUT_OPTICAL3_COMMAND,
    CONF_INPUT_USB_COMMAND: DEFAULT_INPUT_USB_COMMAND,
}

COMMAND_KEYS = (
    CONF_POWER_ON_COMMAND,
    CONF_POWER_OFF_COMMAND,
    CONF_INPUT_OPTICAL3_COMMAND,
    CONF_INPUT_USB_COMMAND,
)


class HegelConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle the config flow for a Hegel amplifier."""

    VERSION = 1
    MINOR_VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> config_entries.ConfigFlowResult:
        """Collect the name, host and control port."""
        errors: dict[str, str] = {}
        if user_input is not None:
            host = user_input[CONF_HOST].strip()
            port = user_input[CONF_PORT]
            if not host:
                errors[CONF_HOST] = "invalid_host"
            else:
                # host:port identifies one amplifier
                await self.async_set_unique_id(f"{host}:{port}")
                self._abort_if_unique_id_configured()
                return self.async_create_entry(
                    title=user_input.get(CONF_NAME) or DEFAULT_NAME,
                    data={CONF_HOST: host, CONF_PORT: port},
                    options=dict(OPTION_DEFAULTS),
                )
        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
                    vol.Required(CONF_HOST): str,
                    vol.Required(CONF_PORT, default=DEFAULT_PORT): vol.All(
                        vol.Coerce(int), vol.Range(min=1, max=65535)
                    ),
                }
            ),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(
        _config_entry: config_entries.ConfigEntry,
    ) -> config_entries.OptionsFlow:
        """Return the options flow handler for Hegel IP."""
        return HegelOptionsFlowHandler()


class HegelOptionsFlowHandler(config_entries.OptionsFlow):
    """Edit the connect timeout, verbose logging and command strings."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> config_entries.ConfigFlowResult:
        """Show and store the options."""
        errors: dict[str, str] = {}
        if user_input is not None:
            for key in COMMAND_KEYS:
                if not str(user_input.get(key, "")).strip():
                    errors[key] = "empty_command"
            if not errors:
                return self.async_create_entry(
                    data={
                        **user_input,
                        **{key: user_input[key].strip() for key in COMMAND_KEYS},
                    }
                )

        current = {**OPTION_DEFAULTS, **self.config_entry.options}
        schema: dict[Any, Any] = {
            vol.Required(CONF_TIMEOUT_MS, default=current[CONF_TIMEOUT_MS]): vol.All(
                vol.Coerce(int), vol.Range(min=MIN_TIMEOUT_MS, max=MAX_TIMEOUT_MS)
            ),
            vol.Required(CONF_DEBUG, default=current[CONF_DEBUG]): bool,
        }
        for key in COMMAND_KEYS:
            schema[vol.Required(key, default=current[key])] = str
        return self.async_show_form(
            step_id="init", data_schema=vol.Schema(schema), errors=errors
        )
