"""System tray indicator with device connection and meeting mode switches.

Provides a QSystemTrayIcon wrapper exposing the small surface the
Reconciler drives: an icon, two checkable menu items, and signals for
genuine user interaction.

Usage:
    from headsetctrl.ui.system_tray import SystemTrayManager

    tray = SystemTrayManager()
    tray.profile_toggled.connect(reconciler.on_user_toggle_profile)
    tray.show()
"""

from __future__ import annotations

import contextlib
import logging

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QAction, QBrush, QColor, QCursor, QIcon, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QMenu, QSystemTrayIcon

from headsetctrl.models.status import IconState, Toggle

logger = logging.getLogger(__name__)

TOP_BAR_LABEL = "Headphones"

# Freedesktop icon names per indicator state
THEME_ICON_NAMES: dict[IconState, str] = {
    IconState.DISCONNECTED: "action-unavailable-symbolic",
    IconState.MEETING: "audio-input-microphone-symbolic",
    IconState.QUALITY: "audio-headphones-symbolic",
}

# Fallback dot colors when the icon theme lacks the names above
_FALLBACK_COLORS: dict[IconState, str] = {
    IconState.DISCONNECTED: "#9e9e9e",
    IconState.MEETING: "#ff9800",
    IconState.QUALITY: "#4caf50",
}

_MODE_LABELS: dict[IconState, str] = {
    IconState.DISCONNECTED: "Disconnected",
    IconState.MEETING: "Meeting mode",
    IconState.QUALITY: "Quality mode",
}


class SystemTrayManager(QObject):
    """Manages the tray icon and its two-switch context menu.

    Position changes made through :meth:`set_toggle_position` are silent.
    The ``connection_toggled`` and ``profile_toggled`` signals are forwarded
    from ``QAction.triggered`` only, which Qt emits for user activation and
    never for ``setChecked()``.

    Example:
        tray = SystemTrayManager()
        tray.connection_toggled.connect(on_connection_clicked)
        tray.set_toggle_position(Toggle.CONNECTION, True)  # no signal
    """

    connection_toggled = Signal(bool)  # new checked position
    profile_toggled = Signal(bool)  # new checked position (True = meeting)
    quit_requested = Signal()

    def __init__(self, label: str = TOP_BAR_LABEL, parent: QObject | None = None) -> None:
        """Initialize the tray manager.

        Args:
            label: Text shown in the tooltip and menu header.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self._label = label
        self._icon_state = IconState.DISCONNECTED
        self._icons: dict[IconState, QIcon] = {}

        self._tray = QSystemTrayIcon(self._icon_for(self._icon_state))
        self._tray.setToolTip(self._tooltip())
        self._tray.activated.connect(self._on_activated)

        self._menu = QMenu()

        header = QAction(label, self._menu)
        header.setEnabled(False)
        self._menu.addAction(header)
        self._menu.addSeparator()

        self._connection_action = QAction("Device connected", self._menu)
        self._connection_action.setCheckable(True)
        self._connection_action.setChecked(False)
        self._connection_action.setEnabled(True)
        self._connection_action.triggered.connect(self.connection_toggled)
        self._menu.addAction(self._connection_action)

        # Disabled until a Bluetooth card reports a known profile
        self._profile_action = QAction("Meeting mode", self._menu)
        self._profile_action.setCheckable(True)
        self._profile_action.setChecked(False)
        self._profile_action.setEnabled(False)
        self._profile_action.triggered.connect(self.profile_toggled)
        self._menu.addAction(self._profile_action)

        self._menu.addSeparator()
        quit_action = QAction("Quit", self._menu)
        quit_action.triggered.connect(self.quit_requested.emit)
        self._menu.addAction(quit_action)

        self._tray.setContextMenu(self._menu)

    @property
    def available(self) -> bool:
        """Return True if system tray is available on this platform."""
        return QSystemTrayIcon.isSystemTrayAvailable()

    @property
    def icon_state(self) -> IconState:
        """Return the icon currently shown."""
        return self._icon_state

    @property
    def menu(self) -> QMenu:
        """Return the context menu."""
        return self._menu

    def show(self) -> None:
        """Show the tray icon."""
        if self.available:
            self._tray.show()
            logger.info("System tray icon shown")
        else:
            logger.warning("System tray not available on this platform")

    def set_icon(self, state: IconState) -> None:
        """Show the icon for state (no-op if already shown)."""
        if state is self._icon_state:
            return
        self._icon_state = state
        self._tray.setIcon(self._icon_for(state))
        self._tray.setToolTip(self._tooltip())

    def toggle_position(self, which: Toggle) -> bool:
        """Return the displayed position of a switch."""
        return self._action(which).isChecked()

    def set_toggle_position(self, which: Toggle, on: bool) -> None:
        """Set a switch position without emitting any signal.

        Args:
            which: The switch to update.
            on: New checked position.
        """
        action = self._action(which)
        action.blockSignals(True)
        action.setChecked(on)
        action.blockSignals(False)

    def toggle_enabled(self, which: Toggle) -> bool:
        """Return whether a switch accepts user interaction."""
        return self._action(which).isEnabled()

    def set_toggle_enabled(self, which: Toggle, enabled: bool) -> None:
        """Enable or disable a switch."""
        self._action(which).setEnabled(enabled)

    def _action(self, which: Toggle) -> QAction:
        if which is Toggle.CONNECTION:
            return self._connection_action
        return self._profile_action

    def _tooltip(self) -> str:
        return f"{self._label}: {_MODE_LABELS[self._icon_state]}"

    def _icon_for(self, state: IconState) -> QIcon:
        """Return the themed icon for state, painting a fallback if missing."""
        if state not in self._icons:
            icon = QIcon.fromTheme(THEME_ICON_NAMES[state])
            if icon.isNull():
                icon = self._build_fallback_icon(state)
            self._icons[state] = icon
        return self._icons[state]

    @staticmethod
    def _build_fallback_icon(state: IconState) -> QIcon:
        """Paint a filled status dot for state."""
        size = 64
        pixmap = QPixmap(size, size)
        pixmap.fill(QColor(0, 0, 0, 0))

        painter = QPainter(pixmap)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            margin = 8
            painter.setPen(QPen(QColor("#202020"), 2))
            painter.setBrush(QBrush(QColor(_FALLBACK_COLORS[state])))
            painter.drawEllipse(margin, margin, size - margin * 2, size - margin * 2)
        finally:
            painter.end()

        return QIcon(pixmap)

    def _on_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        """Open the menu on a plain click as well as on right-click.

        Args:
            reason: The activation reason.
        """
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._menu.popup(QCursor.pos())

    def cleanup(self) -> None:
        """Hide the icon and stop forwarding user interaction.

        Must be called before app.quit() or during aboutToQuit handling,
        after the Reconciler has stopped polling.
        """
        self._tray.hide()
        with contextlib.suppress(RuntimeError):
            self._connection_action.triggered.disconnect()
        with contextlib.suppress(RuntimeError):
            self._profile_action.triggered.disconnect()
