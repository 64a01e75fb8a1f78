# jumpjump/game/events.py
"""
Domain events emitted by the session.

The session never calls sound, haptics or rendering code itself. It collects
events while handling input and ticking, hands them back from `tick()`, and
the host fans them out with `dispatch` once the tick is done.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, Iterable, List

logger = logging.getLogger(__name__)


class EventType(Enum):
    CHARGE_START = auto()
    JUMP = auto()
    LANDING_NORMAL = auto()
    LANDING_PERFECT = auto()
    BONUS = auto()
    GAME_OVER = auto()
    RESET = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Attributes:
        type: what happened
        data: payload (score, combo, power, reason, ...)
        tick: session tick the event belongs to
    """
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    tick: int = 0


Handler = Callable[[GameEvent], None]


def dispatch(events: Iterable[GameEvent], handlers: Iterable[Handler]) -> int:
    """
    Deliver each event to every handler, in order.

    A failing handler is logged and skipped; it never reaches the caller.
    Returns the number of handler failures.
    """
    handlers = list(handlers)
    failures = 0
    for event in events:
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                failures += 1
                logger.error(f"Error in event handler for {event.type.name}: {e}")
    return failures


def of_type(events: Iterable[GameEvent], event_type: EventType) -> List[GameEvent]:
    return [e for e in events if e.type == event_type]
