"""Test fixtures for headsetctrl tests."""

import os
from collections.abc import Sequence

import pytest

# Tray and menu widgets need a Qt platform even without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from headsetctrl.core.runner import CommandRunner  # noqa: E402

ADDRESS = "14:3F:A6:5D:21:C0"
CARD_NAME = "bluez_card.14_3F_A6_5D_21_C0"

DEVICES_LISTING = f"""\
Device 5C:52:30:A1:7E:02 Living Room Speaker
Device {ADDRESS} WH-1000XM4
Device 00:1A:7D:DA:71:13 Keychron K2
"""

DEVICES_LISTING_WITHOUT_TARGET = """\
Device 5C:52:30:A1:7E:02 Living Room Speaker
Device 00:1A:7D:DA:71:13 Keychron K2
"""


def device_info(connected: str = "yes") -> str:
    """Return ``bluetoothctl info`` output with the given Connected value."""
    return f"""\
Device {ADDRESS} (public)
\tName: WH-1000XM4
\tAlias: WH-1000XM4
\tClass: 0x00240404
\tIcon: audio-headset
\tPaired: yes
\tBonded: yes
\tTrusted: yes
\tBlocked: no
\tConnected: {connected}
\tLegacyPairing: no
\tUUID: Audio Sink                (0000110b-0000-1000-8000-00805f9b34fb)
"""


def card_listing(active_profile: str = "a2dp_sink", include_bluez: bool = True) -> str:
    """Return ``pactl list cards`` output with an onboard and a Bluetooth card."""
    onboard = """\
Card #42
\tName: alsa_card.pci-0000_00_1f.3
\tDriver: module-alsa-card.c
\tOwner Module: 7
\tProperties:
\t\talsa.card = "0"
\t\tdevice.description = "Built-in Audio"
\t\tdevice.product.name = "Cannon Point-LP High Definition Audio Controller"
\tProfiles:
\t\toutput:analog-stereo: Analog Stereo Output (sinks: 1, sources: 0, priority: 6500, available: yes)
\t\toff: Off (sinks: 0, sources: 0, priority: 0, available: yes)
\tActive Profile: output:analog-stereo+input:analog-stereo
"""
    bluez = f"""\
Card #43
\tName: {CARD_NAME}
\tDriver: module-bluez5-device.c
\tOwner Module: 28
\tProperties:
\t\tdevice.description = "WH-1000XM4"
\t\tdevice.string = "{ADDRESS}"
\t\tdevice.api = "bluez"
\t\tdevice.bus = "bluetooth"
\tProfiles:
\t\ta2dp_sink: High Fidelity Playback (A2DP Sink) (sinks: 1, sources: 0, priority: 40, available: yes)
\t\thandsfree_head_unit: Handsfree Head Unit (HFP) (sinks: 1, sources: 1, priority: 30, available: yes)
\t\toff: Off (sinks: 0, sources: 0, priority: 0, available: yes)
\tActive Profile: {active_profile}
"""
    return onboard + "\n" + bluez if include_bluez else onboard


class FakeRunner(CommandRunner):
    """CommandRunner returning canned stdout and recording every call."""

    def __init__(self, responses: dict[tuple[str, ...], str] | None = None) -> None:
        super().__init__(timeout=1.0)
        self.responses: dict[tuple[str, ...], str] = dict(responses or {})
        self.calls: list[list[str]] = []

    def run(self, args: Sequence[str]) -> str:
        self.calls.append(list(args))
        return self.responses.get(tuple(args), "")

    def calls_to(self, *prefix: str) -> list[list[str]]:
        """Return recorded calls starting with prefix."""
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture
def runner() -> FakeRunner:
    """Return a runner simulating a connected headset in quality mode."""
    return FakeRunner(
        {
            ("bluetoothctl", "devices"): DEVICES_LISTING,
            ("bluetoothctl", "info", ADDRESS): device_info("yes"),
            ("pactl", "list", "cards"): card_listing("a2dp_sink"),
        }
    )
