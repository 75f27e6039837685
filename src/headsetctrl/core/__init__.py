"""Core logic layer.

This module contains the poll-and-reconcile engine and its two external
collaborators, both reached through a blocking command runner.

Classes:
    CommandRunner: Runs external commands and captures stdout.
    DeviceRegistry: Device lookup and control via bluetoothctl.
    CardRegistry: Audio card lookup and profile switching via pactl.
    ConfigManager: QSettings wrapper for configuration.
    Reconciler: Keeps the tray indicator in step with external state.
"""

from headsetctrl.core.audio import CardRegistry
from headsetctrl.core.bluetooth import DeviceRegistry
from headsetctrl.core.config import ConfigManager
from headsetctrl.core.reconciler import Reconciler
from headsetctrl.core.runner import CommandRunner

__all__ = ["CardRegistry", "CommandRunner", "ConfigManager", "DeviceRegistry", "Reconciler"]
