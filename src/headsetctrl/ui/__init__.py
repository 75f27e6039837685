"""Qt presentation layer: the system tray indicator."""
