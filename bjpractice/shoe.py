"""Multi-deck shoe with penetration tracking and a running count."""

import logging
import math
from random import Random, SystemRandom
from typing import Iterable, Iterator

from bjpractice.cards import Card, Rank, Suit
from bjpractice.counting import COUNTING_SYSTEMS, CountingSystem, CountingSystemName

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52
MIN_DECKS = 1
MAX_DECKS = 8
MIN_PENETRATION = 0.5
MAX_PENETRATION = 1.0


class ShoeEmptyError(IndexError):
    """Raised when a card is drawn from an exhausted shoe."""


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class Shoe:
    """
    A multi-deck shoe with a discard pile and a running count.

    Cards are dealt from the end of ``cards`` and moved onto ``dealt_cards``,
    so ``len(cards) + len(dealt_cards)`` always equals ``total_cards``.
    """

    def __init__(
        self,
        deck_count: int = 6,
        penetration: float = 0.75,
        counting_system: CountingSystemName | str = CountingSystemName.HI_LO,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a shoe in natural (unshuffled) order.

        Args:
            deck_count: Number of decks, clamped to 1-8
            penetration: Fraction dealt before a reshuffle is due, clamped to 0.5-1.0
            counting_system: Identifier of the active counting system
            rng: Random source for shuffling; defaults to OS entropy
        """
        self._deck_count = int(_clamp(deck_count, MIN_DECKS, MAX_DECKS))
        self._penetration = _clamp(penetration, MIN_PENETRATION, MAX_PENETRATION)
        self._system: CountingSystem = COUNTING_SYSTEMS[CountingSystemName(counting_system)]
        self._rng = rng or SystemRandom()
        self.cards: list[Card] = []
        self.dealt_cards: list[Card] = []
        self._running_count = 0
        self.initialize()

    def initialize(self) -> None:
        """Rebuild every deck in natural order and reset the count."""
        self.cards = [
            Card(rank, suit)
            for _ in range(self._deck_count)
            for suit in Suit
            for rank in Rank
        ]
        self.dealt_cards = []
        self._running_count = 0

    def shuffle(self) -> None:
        """Fisher-Yates shuffle of the draw pile; clears discards and count."""
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randrange(i + 1)
            cards[i], cards[j] = cards[j], cards[i]

        self.dealt_cards = []
        self._running_count = 0

    def reshuffle(self, in_play: Iterable[Card] = ()) -> None:
        """
        Merge the discard pile back in and shuffle everything.

        Cards in ``in_play`` are still on the table and stay on the discard pile.
        """
        held = {id(card) for card in in_play}
        kept = [card for card in self.dealt_cards if id(card) in held]
        for card in self.dealt_cards:
            if id(card) not in held:
                card.face_up = True
                self.cards.append(card)
        self.shuffle()
        self.dealt_cards = kept
        logger.debug("Shoe reshuffled (%d decks)", self._deck_count)

    def deal(self) -> Card:
        """Deal one card from the top of the shoe onto the discard pile."""
        if not self.cards:
            logger.error("Attempted to deal from an empty shoe")
            raise ShoeEmptyError("Cannot deal from empty shoe")
        card = self.cards.pop()
        self.dealt_cards.append(card)
        return card

    def update_count(self, card: Card) -> int:
        """
        Add a revealed card's tag to the running count.

        Face-down cards are not counted until they are turned over.

        Returns:
            The tag applied (0 for face-down cards)
        """
        if not card.face_up:
            return 0
        tag = self._system.tag(card.rank)
        self._running_count += tag
        return tag

    @property
    def running_count(self) -> int:
        """Return the running count since the last shuffle."""
        return self._running_count

    @property
    def true_count(self) -> int:
        """
        Return the running count per remaining deck, rounded half-up.

        With less than half a deck left the raw running count is returned.
        """
        decks_remaining = self.decks_remaining
        if decks_remaining < 0.5:
            return self._running_count
        return math.floor(self._running_count / decks_remaining + 0.5)

    @property
    def needs_reshuffle(self) -> bool:
        """Check if the dealt fraction has reached the penetration threshold."""
        return len(self.dealt_cards) / self.total_cards >= self._penetration

    def set_deck_count(self, count: int) -> None:
        """Change the number of decks; rebuilds and shuffles the shoe."""
        self._deck_count = int(_clamp(count, MIN_DECKS, MAX_DECKS))
        self.initialize()
        self.shuffle()

    def set_counting_system(self, name: CountingSystemName | str) -> bool:
        """Switch the active counting system. Unknown names are ignored."""
        try:
            self._system = COUNTING_SYSTEMS[CountingSystemName(name)]
        except ValueError:
            logger.warning("Unknown counting system %r ignored", name)
            return False
        return True

    def set_penetration(self, level: float) -> None:
        """Set the reshuffle threshold, clamped to 0.5-1.0."""
        self._penetration = _clamp(level, MIN_PENETRATION, MAX_PENETRATION)

    @property
    def counting_system(self) -> CountingSystem:
        return self._system

    @property
    def cards_remaining(self) -> int:
        return len(self.cards)

    @property
    def cards_dealt(self) -> int:
        return len(self.dealt_cards)

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full shoe."""
        return self._deck_count * CARDS_PER_DECK

    @property
    def deck_count(self) -> int:
        return self._deck_count

    @property
    def decks_remaining(self) -> float:
        """Return the number of decks left to deal."""
        return len(self.cards) / CARDS_PER_DECK

    @property
    def penetration(self) -> float:
        return self._penetration

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)
