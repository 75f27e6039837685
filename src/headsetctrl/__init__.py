"""HeadsetCTRL: tray indicator for a Bluetooth headset's connection and audio profile."""

__version__ = "0.1.0"
