"""Configuration manager using QSettings for persistent storage."""

import logging

from PySide6.QtCore import QSettings

from headsetctrl.core.audio import DEFAULT_CARD_VENDOR, MEETING_PROFILE, QUALITY_PROFILE
from headsetctrl.core.bluetooth import DEFAULT_DEVICE_NAME
from headsetctrl.core.runner import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

# Device
_KEY_DEVICE_NAME = "device/name"

# Audio card
_KEY_CARD_VENDOR = "audio/card_vendor"
_KEY_QUALITY_PROFILE = "audio/quality_profile"
_KEY_MEETING_PROFILE = "audio/meeting_profile"

# Monitoring
_KEY_POLL_INTERVAL_MS = "monitoring/poll_interval_ms"
_KEY_COMMAND_TIMEOUT = "commands/timeout"

DEFAULT_POLL_INTERVAL_MS = 1000
MIN_POLL_INTERVAL_MS = 250
MAX_POLL_INTERVAL_MS = 60_000
MIN_COMMAND_TIMEOUT = 1
MAX_COMMAND_TIMEOUT = 60


def clamp_poll_interval(ms: int) -> int:
    """Clamp a poll interval to the supported range."""
    return max(MIN_POLL_INTERVAL_MS, min(MAX_POLL_INTERVAL_MS, ms))


class ConfigManager:
    """Wrapper around QSettings for type-safe config access.

    QSettings stores config in platform-specific locations; on Linux this
    is ``~/.config/HeadsetCTRL/HeadsetCTRL.conf``.

    Example:
        config = ConfigManager()
        registry = DeviceRegistry(runner, config.get_device_name())
    """

    def __init__(self, organization: str = "HeadsetCTRL", application: str = "HeadsetCTRL") -> None:
        """Initialize the config manager.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
        """
        self._settings = QSettings(organization, application)

    def _get_str(self, key: str, default: str) -> str:
        value = self._settings.value(key, default, str)
        return str(value) if value else default

    # -- Device settings -------------------------------------------------------

    def get_device_name(self) -> str:
        """Return the device name substring to look for.

        Returns:
            Name substring (default "WH-1000XM4").
        """
        return self._get_str(_KEY_DEVICE_NAME, DEFAULT_DEVICE_NAME)

    def set_device_name(self, name: str) -> None:
        """Set the device name substring.

        Args:
            name: Substring of the name shown by ``bluetoothctl devices``.
        """
        self._settings.setValue(_KEY_DEVICE_NAME, name)

    # -- Audio settings --------------------------------------------------------

    def get_card_vendor(self) -> str:
        """Return the substring identifying the Bluetooth card (default "bluez")."""
        return self._get_str(_KEY_CARD_VENDOR, DEFAULT_CARD_VENDOR)

    def set_card_vendor(self, vendor: str) -> None:
        """Set the substring identifying the Bluetooth card."""
        self._settings.setValue(_KEY_CARD_VENDOR, vendor)

    def get_quality_profile(self) -> str:
        """Return the high-fidelity profile identifier (default "a2dp_sink")."""
        return self._get_str(_KEY_QUALITY_PROFILE, QUALITY_PROFILE)

    def set_quality_profile(self, profile: str) -> None:
        """Set the high-fidelity profile identifier."""
        self._settings.setValue(_KEY_QUALITY_PROFILE, profile)

    def get_meeting_profile(self) -> str:
        """Return the headset profile identifier (default "handsfree_head_unit")."""
        return self._get_str(_KEY_MEETING_PROFILE, MEETING_PROFILE)

    def set_meeting_profile(self, profile: str) -> None:
        """Set the headset profile identifier."""
        self._settings.setValue(_KEY_MEETING_PROFILE, profile)

    # -- Monitoring settings ---------------------------------------------------

    def get_poll_interval_ms(self) -> int:
        """Return the poll interval in milliseconds.

        Returns:
            Interval in milliseconds (default 1000).
        """
        value = self._settings.value(_KEY_POLL_INTERVAL_MS, DEFAULT_POLL_INTERVAL_MS, int)
        return clamp_poll_interval(int(value))  # type: ignore[arg-type]

    def set_poll_interval_ms(self, ms: int) -> None:
        """Set the poll interval.

        Args:
            ms: Interval in milliseconds (250-60000).
        """
        self._settings.setValue(_KEY_POLL_INTERVAL_MS, clamp_poll_interval(ms))

    def get_command_timeout(self) -> int:
        """Return the external command timeout in seconds.

        Returns:
            Timeout in seconds (default 5).
        """
        value = self._settings.value(_KEY_COMMAND_TIMEOUT, int(DEFAULT_TIMEOUT), int)
        return max(MIN_COMMAND_TIMEOUT, min(MAX_COMMAND_TIMEOUT, int(value)))  # type: ignore[arg-type]

    def set_command_timeout(self, seconds: int) -> None:
        """Set the external command timeout.

        Args:
            seconds: Timeout in seconds (1-60).
        """
        self._settings.setValue(
            _KEY_COMMAND_TIMEOUT, max(MIN_COMMAND_TIMEOUT, min(MAX_COMMAND_TIMEOUT, seconds))
        )

    # -- General settings ------------------------------------------------------

    def clear(self) -> None:
        """Clear all settings (useful for testing or reset)."""
        self._settings.clear()

    def sync(self) -> None:
        """Force settings to be written to disk."""
        self._settings.sync()
