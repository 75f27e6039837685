"""Main entry point for the HeadsetCTRL application."""

import argparse
import logging
import sys
from collections.abc import Sequence

from PySide6.QtWidgets import QApplication

from headsetctrl.core.audio import CardRegistry
from headsetctrl.core.bluetooth import DeviceRegistry
from headsetctrl.core.config import ConfigManager, clamp_poll_interval
from headsetctrl.core.reconciler import Reconciler
from headsetctrl.core.runner import CommandRunner
from headsetctrl.ui.system_tray import TOP_BAR_LABEL, SystemTrayManager

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments without the program name.

    Returns:
        Parsed namespace with device, interval and debug.
    """
    parser = argparse.ArgumentParser(
        prog="headsetctrl",
        description="HeadsetCTRL: Bluetooth headset connection and profile indicator",
    )
    parser.add_argument(
        "--device", default=None, help="device name substring (default: from settings)",
    )
    parser.add_argument(
        "--interval", type=int, default=None, help="poll interval in milliseconds",
    )
    parser.add_argument(
        "--debug", action="store_true", help="enable debug logging",
    )
    return parser.parse_args(list(argv))


def build_reconciler(
    config: ConfigManager,
    tray: SystemTrayManager,
    device_name: str | None = None,
    interval_ms: int | None = None,
) -> Reconciler:
    """Create the registries and reconciler from configuration.

    Args:
        config: Stored configuration.
        tray: The tray surface to drive.
        device_name: Session override for the device name.
        interval_ms: Session override for the poll interval.

    Returns:
        A Reconciler wired to the tray, not yet polling.
    """
    runner = CommandRunner(timeout=config.get_command_timeout())
    devices = DeviceRegistry(runner, device_name or config.get_device_name())
    cards = CardRegistry(
        runner,
        vendor=config.get_card_vendor(),
        quality_profile=config.get_quality_profile(),
        meeting_profile=config.get_meeting_profile(),
    )
    if interval_ms is not None:
        interval = clamp_poll_interval(interval_ms)
    else:
        interval = config.get_poll_interval_ms()
    return Reconciler(tray, devices, cards, interval_ms=interval)


def main() -> int:
    """Run the HeadsetCTRL application.

    Returns:
        Exit code (0 for success).
    """
    QApplication.setApplicationName("HeadsetCTRL")
    QApplication.setApplicationDisplayName("HeadsetCTRL")
    QApplication.setOrganizationName("HeadsetCTRL")

    app = QApplication(sys.argv)
    # Tray-only app: closing menus or dialogs must not end the session
    app.setQuitOnLastWindowClosed(False)

    parsed = parse_args(app.arguments()[1:])
    logging.basicConfig(
        level=logging.DEBUG if parsed.debug else logging.INFO,
        format=LOG_FORMAT,
    )

    config = ConfigManager()
    tray = SystemTrayManager(label=TOP_BAR_LABEL)
    reconciler = build_reconciler(config, tray, parsed.device, parsed.interval)

    logger.info("Enabling %s", TOP_BAR_LABEL)
    tray.show()
    reconciler.sync_status()
    reconciler.start_polling()

    def on_quit() -> None:
        logger.info("Disabling %s", TOP_BAR_LABEL)
        reconciler.stop_polling()
        tray.cleanup()
        app.quit()

    tray.quit_requested.connect(on_quit)

    exit_code = app.exec()

    # Covers exits that bypass the Quit action (e.g. session logout)
    reconciler.stop_polling()
    config.sync()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
