# jumpjump/game/feedback.py
"""
Maps domain events onto whatever sound / vibration the host can do.

Hosts describe themselves with `HostCapabilities`; the router only checks
which capabilities are present, never which host it is running on.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .events import EventType, GameEvent

logger = logging.getLogger(__name__)


class AudioSink(Protocol):
    def play(self, sound: str) -> None: ...
    def start_music(self) -> None: ...
    def stop_music(self) -> None: ...


class HapticsSink(Protocol):
    def vibrate(self, strength: str) -> None: ...   # "light" | "medium" | "heavy"


@dataclass
class HostCapabilities:
    audio: Optional[AudioSink] = None
    haptics: Optional[HapticsSink] = None


# event -> (sound, vibration strength)
FEEDBACK_TABLE = {
    EventType.JUMP: ("jump", None),
    EventType.LANDING_NORMAL: ("land", "light"),
    EventType.LANDING_PERFECT: ("perfect", "medium"),
    EventType.BONUS: (None, "medium"),
    EventType.GAME_OVER: ("game_over", "heavy"),
}


class FeedbackRouter:
    """Event handler; pass `router.handle` to `events.dispatch`."""

    def __init__(self, caps: HostCapabilities):
        self.caps = caps
        self._music_on = False

    def handle(self, event: GameEvent) -> None:
        audio, haptics = self.caps.audio, self.caps.haptics

        if event.type == EventType.CHARGE_START and audio is not None and not self._music_on:
            audio.start_music()
            self._music_on = True
            return

        sound, strength = FEEDBACK_TABLE.get(event.type, (None, None))
        if sound is not None and audio is not None:
            audio.play(sound)
        if strength is not None and haptics is not None:
            haptics.vibrate(strength)

        if event.type == EventType.GAME_OVER and audio is not None and self._music_on:
            audio.stop_music()
            self._music_on = False


class LogAudio:
    """Audio stand-in for hosts without a mixer: logs what would be played."""

    def play(self, sound: str) -> None:
        logger.debug("sound: %s", sound)

    def start_music(self) -> None:
        logger.debug("music: start")

    def stop_music(self) -> None:
        logger.debug("music: stop")
