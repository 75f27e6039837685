"""Audio card registry queries via pactl.

``pactl list cards`` prints one blank-line separated block per card. The
Bluetooth card is the first block mentioning the vendor substring
(``bluez``); its ``Name:`` and ``Active Profile:`` fields are read.
"""

from __future__ import annotations

import logging
import re

from headsetctrl.core.runner import CommandRunner
from headsetctrl.models.status import AudioCard, ProfileState

logger = logging.getLogger(__name__)

PACTL = "pactl"
DEFAULT_CARD_VENDOR = "bluez"
QUALITY_PROFILE = "a2dp_sink"
MEETING_PROFILE = "handsfree_head_unit"

_BLOCK_SEPARATOR_RE = re.compile(r"\n[ \t]*\n")
_NAME_RE = re.compile(r"^[ \t]*Name:[ \t]*(.*?)[ \t]*$", re.MULTILINE)
_ACTIVE_PROFILE_RE = re.compile(r"^[ \t]*Active Profile:[ \t]*(.*?)[ \t]*$", re.MULTILINE)


def split_card_blocks(listing: str) -> list[str]:
    """Split ``pactl list cards`` output into per-card blocks."""
    return [block for block in _BLOCK_SEPARATOR_RE.split(listing) if block.strip()]


def parse_card(listing: str, vendor: str = DEFAULT_CARD_VENDOR) -> AudioCard:
    """Find the first card block containing vendor and read its fields.

    Args:
        listing: Output of ``pactl list cards``.
        vendor: Substring identifying the Bluetooth card block.

    Returns:
        AudioCard with name and active profile, or an empty AudioCard if
        no block matches.
    """
    if not vendor:
        return AudioCard()
    for block in split_card_blocks(listing):
        if vendor not in block:
            continue
        name = _NAME_RE.search(block)
        profile = _ACTIVE_PROFILE_RE.search(block)
        return AudioCard(
            name=name.group(1) if name else "",
            active_profile=profile.group(1) if profile else "",
        )
    return AudioCard()


class CardRegistry:
    """Look up and switch the profile of the Bluetooth audio card.

    Example:
        registry = CardRegistry(runner)
        card = registry.query()
        if registry.profile_state(card) is ProfileState.QUALITY:
            registry.set_profile(card.name, registry.meeting_profile)
    """

    def __init__(
        self,
        runner: CommandRunner,
        vendor: str = DEFAULT_CARD_VENDOR,
        quality_profile: str = QUALITY_PROFILE,
        meeting_profile: str = MEETING_PROFILE,
    ) -> None:
        """Initialize the registry.

        Args:
            runner: Command runner used for every pactl call.
            vendor: Substring identifying the Bluetooth card block.
            quality_profile: Profile identifier for high-fidelity playback.
            meeting_profile: Profile identifier for headset (microphone) mode.
        """
        self._runner = runner
        self._vendor = vendor
        self._quality_profile = quality_profile
        self._meeting_profile = meeting_profile

    @property
    def quality_profile(self) -> str:
        """Return the high-fidelity profile identifier."""
        return self._quality_profile

    @property
    def meeting_profile(self) -> str:
        """Return the headset profile identifier."""
        return self._meeting_profile

    def query(self) -> AudioCard:
        """Sample the Bluetooth card from ``pactl list cards``."""
        listing = self._runner.run([PACTL, "list", "cards"])
        return parse_card(listing, self._vendor)

    def profile_state(self, card: AudioCard) -> ProfileState:
        """Classify a sampled card's active profile."""
        return ProfileState.from_profile(
            card.active_profile, self._quality_profile, self._meeting_profile
        )

    def set_profile(self, card_name: str, profile: str) -> None:
        """Issue ``pactl set-card-profile`` (fire-and-forget)."""
        logger.info("Switching %s to %s", card_name or "unknown card", profile)
        self._runner.run([PACTL, "set-card-profile", card_name, profile])
