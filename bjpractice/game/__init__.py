"""Round state machine and event system."""

from bjpractice.game.events import EventEmitter, EventType, GameEvent
from bjpractice.game.state import GamePhase, ResultType
from bjpractice.game.engine import BlackjackGame

__all__ = [
    "BlackjackGame",
    "EventEmitter",
    "EventType",
    "GameEvent",
    "GamePhase",
    "ResultType",
]
