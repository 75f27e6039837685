"""Data models for device, card, and indicator state."""

from headsetctrl.models.status import (
    AudioCard,
    BluetoothDevice,
    ConnectionState,
    IconState,
    ProfileState,
    Toggle,
)

__all__ = [
    "AudioCard",
    "BluetoothDevice",
    "ConnectionState",
    "IconState",
    "ProfileState",
    "Toggle",
]
