"""Poll-and-reconcile loop between the tray indicator and external tools.

The Reconciler samples bluetoothctl and pactl on a QTimer, corrects the
tray's icon and switch positions to match, and turns user switch clicks
into fire-and-forget commands. It never waits for a command to take
effect; the next tick observes and reflects the real outcome.

All calls happen on the Qt GUI thread. A tick runs to completion before
any other tick or click is processed, so the only reentrancy concern is a
programmatic switch flip triggering a user handler. The tray's silent
setter rules that out.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QTimer

from headsetctrl.core.config import DEFAULT_POLL_INTERVAL_MS
from headsetctrl.models.status import ConnectionState, IconState, ProfileState, Toggle

if TYPE_CHECKING:
    from headsetctrl.core.audio import CardRegistry
    from headsetctrl.core.bluetooth import DeviceRegistry
    from headsetctrl.ui.system_tray import SystemTrayManager

logger = logging.getLogger(__name__)


class Reconciler(QObject):
    """Keeps the tray indicator in step with the device and audio card.

    Example:
        reconciler = Reconciler(tray, devices, cards)
        reconciler.sync_status()
        reconciler.start_polling()
        ...
        reconciler.stop_polling()
    """

    def __init__(
        self,
        tray: SystemTrayManager,
        devices: DeviceRegistry,
        cards: CardRegistry,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        """Initialize the reconciler and subscribe to user switch events.

        Args:
            tray: Presentation surface holding the icon and both switches.
            devices: Device registry (bluetoothctl).
            cards: Audio card registry (pactl).
            interval_ms: Poll period in milliseconds.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self._tray = tray
        self._devices = devices
        self._cards = cards
        self._icon_state = IconState.DISCONNECTED

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.sync_status)

        self._tray.profile_toggled.connect(self.on_user_toggle_profile)
        self._tray.connection_toggled.connect(self.on_user_toggle_connection)

    @property
    def icon_state(self) -> IconState:
        """Return the icon chosen by the last sync."""
        return self._icon_state

    @property
    def interval_ms(self) -> int:
        """Return the poll period in milliseconds."""
        return self._timer.interval()

    @property
    def is_polling(self) -> bool:
        """Return True while the poll timer is active."""
        return self._timer.isActive()

    def start_polling(self) -> None:
        """Start calling sync_status() every interval until stopped."""
        if self._timer.isActive():
            logger.debug("Polling already active")
            return
        self._timer.start()
        logger.info("Polling every %d ms", self._timer.interval())

    def stop_polling(self) -> None:
        """Stop the poll timer. Safe to call when not polling."""
        if not self._timer.isActive():
            return
        self._timer.stop()
        logger.info("Polling stopped")

    def sync_status(self) -> None:
        """Read both registries and correct the tray to match.

        Only reads external state and updates display state; never issues
        a command that changes the device or card.
        """
        logger.debug("Syncing status")

        card = self._cards.query()
        profile_state = self._cards.profile_state(card)

        self._icon_state = IconState.from_profile_state(profile_state)
        self._tray.set_icon(self._icon_state)
        self._tray.set_toggle_enabled(Toggle.PROFILE, profile_state is not ProfileState.UNKNOWN)
        self._sync_profile_switch(profile_state)

        device = self._devices.query()
        self._sync_connection_switch(device.state)

    def _sync_profile_switch(self, state: ProfileState) -> None:
        """Flip the profile switch once if it disagrees with a known profile.

        The switch is on for meeting mode. An UNKNOWN profile leaves the
        position alone.
        """
        on = self._tray.toggle_position(Toggle.PROFILE)
        if (state is ProfileState.QUALITY and on) or (state is ProfileState.MEETING and not on):
            self._tray.set_toggle_position(Toggle.PROFILE, not on)

    def _sync_connection_switch(self, state: ConnectionState) -> None:
        """Flip the connection switch once if it disagrees with state."""
        on = self._tray.toggle_position(Toggle.CONNECTION)
        if on != state.is_connected:
            self._tray.set_toggle_position(Toggle.CONNECTION, not on)

    def on_user_toggle_profile(self, *_args: object) -> None:
        """Switch the card to the other profile (fire-and-forget).

        Quality switches to meeting; meeting or unknown switches to quality.
        """
        card = self._cards.query()
        profile_state = self._cards.profile_state(card)
        logger.info("Profile toggle clicked (current: %s)", profile_state.value)

        if not card.found:
            logger.warning("No Bluetooth audio card found")

        if profile_state is ProfileState.QUALITY:
            self._cards.set_profile(card.name, self._cards.meeting_profile)
        else:
            self._cards.set_profile(card.name, self._cards.quality_profile)

    def on_user_toggle_connection(self, *_args: object) -> None:
        """Connect or disconnect the device (fire-and-forget)."""
        device = self._devices.query()
        logger.info("Connection toggle clicked (current: %s)", device.state.value)

        if not device.known:
            logger.warning("Device %s not known to bluetoothctl", self._devices.device_name)

        if device.connected:
            self._devices.disconnect(device.address)
        else:
            self._devices.connect(device.address)
