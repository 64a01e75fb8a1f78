# jumpjump/tests/test_events_feedback.py
import logging

from jumpjump.game.events import EventType, GameEvent, dispatch, of_type
from jumpjump.game.feedback import FeedbackRouter, HostCapabilities, LogAudio


class FakeAudio:
    def __init__(self):
        self.calls = []

    def play(self, sound):
        self.calls.append(("play", sound))

    def start_music(self):
        self.calls.append(("music", "start"))

    def stop_music(self):
        self.calls.append(("music", "stop"))


class FakeHaptics:
    def __init__(self):
        self.calls = []

    def vibrate(self, strength):
        self.calls.append(strength)


def _ev(t, **data):
    return GameEvent(type=t, data=data)


def test_failing_handler_does_not_stop_the_rest(caplog):
    seen = []

    def broken(event):
        raise RuntimeError("speaker unplugged")

    with caplog.at_level(logging.ERROR):
        failures = dispatch([_ev(EventType.JUMP), _ev(EventType.LANDING_NORMAL)], [broken, seen.append])
    assert failures == 2
    assert [e.type for e in seen] == [EventType.JUMP, EventType.LANDING_NORMAL]
    assert "speaker unplugged" in caplog.text


def test_of_type_filters():
    evs = [_ev(EventType.JUMP), _ev(EventType.BONUS), _ev(EventType.JUMP)]
    assert len(of_type(evs, EventType.JUMP)) == 2
    assert of_type(evs, EventType.RESET) == []


def test_router_maps_events_to_sound_and_vibration():
    audio, haptics = FakeAudio(), FakeHaptics()
    router = FeedbackRouter(HostCapabilities(audio=audio, haptics=haptics))
    for t in (EventType.CHARGE_START, EventType.JUMP, EventType.LANDING_PERFECT,
              EventType.BONUS, EventType.LANDING_NORMAL, EventType.GAME_OVER):
        router.handle(_ev(t))

    assert audio.calls == [
        ("music", "start"),
        ("play", "jump"),
        ("play", "perfect"),
        ("play", "land"),
        ("play", "game_over"),
        ("music", "stop"),
    ]
    assert haptics.calls == ["medium", "medium", "light", "heavy"]


def test_music_starts_once_per_run():
    audio = FakeAudio()
    router = FeedbackRouter(HostCapabilities(audio=audio))
    router.handle(_ev(EventType.CHARGE_START))
    router.handle(_ev(EventType.CHARGE_START))
    assert audio.calls.count(("music", "start")) == 1
    router.handle(_ev(EventType.GAME_OVER))
    router.handle(_ev(EventType.CHARGE_START))
    assert audio.calls.count(("music", "start")) == 2


def test_no_capabilities_is_silent():
    router = FeedbackRouter(HostCapabilities())
    for t in EventType:
        router.handle(_ev(t))


def test_haptics_only_host():
    haptics = FakeHaptics()
    router = FeedbackRouter(HostCapabilities(haptics=haptics))
    router.handle(_ev(EventType.CHARGE_START))
    router.handle(_ev(EventType.GAME_OVER))
    assert haptics.calls == ["heavy"]


def test_log_audio_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="jumpjump.game.feedback"):
        LogAudio().play("jump")
    assert "sound: jump" in caplog.text
