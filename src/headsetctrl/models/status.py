"""Status models derived from bluetoothctl and pactl output.

Everything here is re-derived on every poll tick; nothing is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProfileState(Enum):
    """Active audio profile of the Bluetooth-backed card."""

    QUALITY = "quality"
    MEETING = "meeting"
    UNKNOWN = "unknown"

    @classmethod
    def from_profile(cls, active_profile: str, quality: str, meeting: str) -> ProfileState:
        """Map a raw ``Active Profile:`` value to a ProfileState.

        Args:
            active_profile: Profile identifier reported by pactl (may be empty).
            quality: Identifier of the high-fidelity profile.
            meeting: Identifier of the voice-call profile.

        Returns:
            QUALITY or MEETING on an exact match, UNKNOWN otherwise.
        """
        if active_profile and active_profile == quality:
            return cls.QUALITY
        if active_profile and active_profile == meeting:
            return cls.MEETING
        return cls.UNKNOWN


class ConnectionState(Enum):
    """Live connection state of the target device."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"

    @property
    def is_connected(self) -> bool:
        """Return True for CONNECTED."""
        return self is ConnectionState.CONNECTED


class IconState(Enum):
    """Indicator icon, derived solely from ProfileState."""

    DISCONNECTED = "disconnected"
    MEETING = "meeting"
    QUALITY = "quality"

    @classmethod
    def from_profile_state(cls, state: ProfileState) -> IconState:
        """Return the icon shown for a profile state."""
        if state is ProfileState.QUALITY:
            return cls.QUALITY
        if state is ProfileState.MEETING:
            return cls.MEETING
        return cls.DISCONNECTED


class Toggle(Enum):
    """The two switch items in the indicator menu."""

    CONNECTION = "connection"
    PROFILE = "profile"


@dataclass(frozen=True, slots=True)
class BluetoothDevice:
    """One sample of the target device.

    Attributes:
        address: Hardware address, or empty string if the device is unknown.
        connected: Whether ``bluetoothctl info`` reported ``Connected: yes``.
    """

    address: str = ""
    connected: bool = False

    @property
    def known(self) -> bool:
        """Return True if the device was found in the device listing."""
        return bool(self.address)

    @property
    def state(self) -> ConnectionState:
        """Return the ConnectionState for this sample."""
        return ConnectionState.CONNECTED if self.connected else ConnectionState.DISCONNECTED


@dataclass(frozen=True, slots=True)
class AudioCard:
    """One sample of the Bluetooth-backed audio card.

    Attributes:
        name: Card name token (e.g. ``bluez_card.AA_BB_CC_DD_EE_FF``), or empty.
        active_profile: Raw ``Active Profile:`` value, or empty.
    """

    name: str = ""
    active_profile: str = ""

    @property
    def found(self) -> bool:
        """Return True if a matching card block was found."""
        return bool(self.name)
