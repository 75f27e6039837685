"""Blocking "run command, capture stdout" primitive.

All external tools (bluetoothctl, pactl) are reached through
:class:`CommandRunner` so the blocking call can later be swapped for a
non-blocking dispatch without touching the reconciliation logic.
"""

import logging
import subprocess
from collections.abc import Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class CommandRunner:
    """Run external commands synchronously and return their stdout.

    Commands are passed as argument lists (never through a shell). Any
    failure collapses to an empty string so callers can treat it as
    ordinary "absent" data.

    Example:
        runner = CommandRunner(timeout=5.0)
        listing = runner.run(["bluetoothctl", "devices"])
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the runner.

        Args:
            timeout: Maximum seconds to wait for each command.
        """
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        """Return the per-command timeout in seconds."""
        return self._timeout

    def run(self, args: Sequence[str]) -> str:
        """Run a command and return its stdout.

        Args:
            args: Program and arguments.

        Returns:
            Captured stdout, or empty string if the command could not run.
        """
        cmd = list(args)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError:
            logger.warning("Command not found: %s", cmd[0] if cmd else "")
            return ""
        except subprocess.TimeoutExpired:
            logger.warning("Command timed out after %.1fs: %s", self._timeout, " ".join(cmd))
            return ""
        except OSError as e:
            logger.warning("Command failed to start: %s: %s", " ".join(cmd), e)
            return ""
        except subprocess.SubprocessError as e:
            logger.debug("Subprocess error for %s: %s", " ".join(cmd), e)
            return ""

        if result.returncode != 0:
            logger.debug(
                "%s exited with code %d: %s",
                " ".join(cmd),
                result.returncode,
                (result.stderr or "").strip(),
            )
        return result.stdout or ""
