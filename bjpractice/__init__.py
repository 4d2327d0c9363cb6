"""Blackjack practice engine - 100% UI-agnostic."""

from bjpractice.cards import Card, Rank, Suit
from bjpractice.hand import Hand, Outcome
from bjpractice.settings import TableSettings
from bjpractice.shoe import Shoe, ShoeEmptyError
from bjpractice.statistics import GameStats
from bjpractice.game import BlackjackGame, EventType, GamePhase, ResultType
from bjpractice.strategy import Action, recommend

__all__ = [
    "Action",
    "BlackjackGame",
    "Card",
    "EventType",
    "GamePhase",
    "GameStats",
    "Hand",
    "Outcome",
    "Rank",
    "ResultType",
    "Shoe",
    "ShoeEmptyError",
    "Suit",
    "TableSettings",
    "recommend",
]
