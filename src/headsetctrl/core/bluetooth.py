"""Device registry queries via bluetoothctl.

The parsers are pure functions over bluetoothctl text output; the
:class:`DeviceRegistry` pairs them with a :class:`CommandRunner`.

Usage:
    from headsetctrl.core.bluetooth import DeviceRegistry

    registry = DeviceRegistry(runner, device_name="WH-1000XM4")
    device = registry.query()
    if not device.connected:
        registry.connect(device.address)
"""

from __future__ import annotations

import logging

from headsetctrl.core.runner import CommandRunner
from headsetctrl.models.status import BluetoothDevice

logger = logging.getLogger(__name__)

BLUETOOTHCTL = "bluetoothctl"
DEFAULT_DEVICE_NAME = "WH-1000XM4"

# Value of the "Connected:" field that means connected
CONNECTED_SENTINEL = "yes"
_CONNECTED_FIELD = "Connected:"


def parse_device_address(listing: str, device_name: str) -> str:
    """Extract the address of the first device whose line mentions device_name.

    ``bluetoothctl devices`` prints one ``Device <address> <name>`` line
    per known device.

    Args:
        listing: Output of ``bluetoothctl devices``.
        device_name: Substring identifying the target device.

    Returns:
        The hardware address, or empty string if no line matches.
    """
    if not device_name:
        return ""
    for line in listing.splitlines():
        if device_name not in line:
            continue
        fields = line.split()
        return fields[1] if len(fields) > 1 else ""
    return ""


def parse_connected(info: str) -> bool:
    """Return True if ``bluetoothctl info`` output reports ``Connected: yes``.

    Only an exact ``yes`` counts; any other value or a missing field is
    treated as disconnected.
    """
    for line in info.splitlines():
        stripped = line.strip()
        if stripped.startswith(_CONNECTED_FIELD):
            return stripped[len(_CONNECTED_FIELD) :].strip() == CONNECTED_SENTINEL
    return False


class DeviceRegistry:
    """Look up and control the one target Bluetooth device."""

    def __init__(self, runner: CommandRunner, device_name: str = DEFAULT_DEVICE_NAME) -> None:
        """Initialize the registry.

        Args:
            runner: Command runner used for every bluetoothctl call.
            device_name: Substring matched against the device listing.
        """
        self._runner = runner
        self._device_name = device_name

    @property
    def device_name(self) -> str:
        """Return the device name substring being tracked."""
        return self._device_name

    def get_address(self) -> str:
        """Return the target device's address, or empty string if unknown."""
        listing = self._runner.run([BLUETOOTHCTL, "devices"])
        return parse_device_address(listing, self._device_name)

    def is_connected(self, address: str) -> bool:
        """Return True if the device at address reports connected.

        An empty address is never connected; bluetoothctl is not queried.
        """
        if not address:
            return False
        info = self._runner.run([BLUETOOTHCTL, "info", address])
        return parse_connected(info)

    def query(self) -> BluetoothDevice:
        """Sample the device: address lookup followed by connection check."""
        address = self.get_address()
        return BluetoothDevice(address=address, connected=self.is_connected(address))

    def connect(self, address: str) -> None:
        """Issue ``bluetoothctl connect`` (fire-and-forget)."""
        logger.info("Connecting %s (%s)", self._device_name, address or "unknown address")
        self._runner.run([BLUETOOTHCTL, "connect", address])

    def disconnect(self, address: str) -> None:
        """Issue ``bluetoothctl disconnect`` (fire-and-forget)."""
        logger.info("Disconnecting %s (%s)", self._device_name, address or "unknown address")
        self._runner.run([BLUETOOTHCTL, "disconnect", address])
