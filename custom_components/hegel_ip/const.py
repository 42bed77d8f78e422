"""Constants for the Hegel IP integration."""

DOMAIN = "hegel_ip"

CONF_TIMEOUT_MS = "timeout_ms"
CONF_DEBUG = "debug"
CONF_POWER_ON_COMMAND = "power_on_command"
CONF_POWER_OFF_COMMAND = "power_off_command"
CONF_INPUT_OPTICAL3_COMMAND = "input_optical3_command"
CONF_INPUT_USB_COMMAND = "input_usb_command"

DEFAULT_NAME = "Hegel H590"
DEFAULT_PORT = 50001  # Hegel IP control port
DEFAULT_TIMEOUT_MS = 1500
DEFAULT_DEBUG = False

DEFAULT_POWER_ON_COMMAND = "-p.1"
DEFAULT_POWER_OFF_COMMAND = "-p.0"
DEFAULT_INPUT_OPTICAL3_COMMAND = "-i.10"
DEFAULT_INPUT_USB_COMMAND = "-i.11"

INPUT_OPTICAL3 = "OPTICAL3"
INPUT_USB = "USB"
