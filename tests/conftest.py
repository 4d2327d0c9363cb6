"""Pytest fixtures for blackjack practice engine tests."""

import pytest
from decimal import Decimal
from random import Random

from bjpractice.cards import Card
from bjpractice.counting import HiLoSystem, HiOpt1System, HiOpt2System, KOSystem, Omega2System
from bjpractice.game import BlackjackGame
from bjpractice.hand import Hand
from bjpractice.settings import TableSettings
from bjpractice.shoe import Shoe
from bjpractice.strategy import BasicStrategy


def _make_hand(*cards: str, bet: Decimal = Decimal("0")) -> Hand:
    """Build a hand from short card strings like 'AS', '10H'."""
    hand = Hand(bet=bet)
    for card in cards:
        hand.add_card(Card.from_string(card))
    return hand


def _stack_shoe(game: BlackjackGame, *cards: str) -> None:
    """
    Put ``cards`` on top of the game's shoe in deal order.

    The shoe deals from the end of its list, so the stack is stored reversed.
    The rest of the shoe stays below so the round never runs dry.
    """
    stacked = [Card.from_string(card) for card in cards]
    game.shoe.cards.extend(reversed(stacked))
    game.shoe.cards = game.shoe.cards[len(stacked):]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    s = Shoe(deck_count=6, penetration=0.75, rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return _make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return _make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return _make_hand("10S", "6H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return _make_hand("8S", "8H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return _make_hand("10S", "6H", "KC")


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def ko():
    """KO counting system."""
    return KOSystem()


@pytest.fixture
def omega2():
    """Omega II counting system."""
    return Omega2System()


@pytest.fixture
def hiopt1():
    """Hi-Opt I counting system."""
    return HiOpt1System()


@pytest.fixture
def hiopt2():
    """Hi-Opt II counting system."""
    return HiOpt2System()


@pytest.fixture
def basic_strategy():
    """Basic strategy tables."""
    return BasicStrategy()


@pytest.fixture
def settings():
    """Default table settings."""
    return TableSettings()


@pytest.fixture
def game(rng):
    """A new game with a 10000 balance and a seeded shoe."""
    return BlackjackGame(
        initial_balance=Decimal("10000"),
        rng=rng,
    )


@pytest.fixture
def events(game):
    """Every event the game emits, in order."""
    received = []
    game.subscribe(received.append)
    return received


@pytest.fixture
def make_hand():
    """Factory for hands built from card strings."""
    return _make_hand


@pytest.fixture
def stack_shoe():
    """Stack known cards on top of a game's shoe."""
    return _stack_shoe
