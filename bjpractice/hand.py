"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterator

from bjpractice.cards import Card


class Outcome(Enum):
    """Result of comparing a player hand against the dealer."""

    WIN = 1
    PUSH = 0
    LOSE = -1


@dataclass
class Hand:
    """
    A betting unit: cards, stake and play flags.

    The value is recomputed from the cards on every access because an ace
    counts as 1 or 11 depending on the rest of the hand.
    """

    cards: list[Card] = field(default_factory=list)
    bet: Decimal = Decimal("0")
    is_doubled: bool = False
    is_split: bool = False
    is_stood: bool = False
    is_busted: bool = False
    is_surrendered: bool = False
    insurance_bet: Decimal = Decimal("0")

    def add_card(self, card: Card) -> None:
        """Add a card to the hand and re-derive the bust flag."""
        self.cards.append(card)
        if self.value > 21:
            self.is_busted = True

    def clear(self) -> None:
        """Reset the hand to its initial empty state."""
        self.cards.clear()
        self.bet = Decimal("0")
        self.is_doubled = False
        self.is_split = False
        self.is_stood = False
        self.is_busted = False
        self.is_surrendered = False
        self.insurance_bet = Decimal("0")

    @property
    def _raw_total(self) -> int:
        """Sum with every ace counted as 11."""
        return sum(card.value for card in self.cards)

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        Returns the highest value that doesn't bust, or the lowest bust value.
        """
        total = self._raw_total
        aces = sum(1 for card in self.cards if card.is_ace)

        # Reduce aces from 11 to 1 as needed
        while total > 21 and aces > 0:
            total -= 10
            aces -= 1

        return total

    @property
    def is_soft(self) -> bool:
        """
        Check if the hand is soft.

        True when the hand holds an ace and the total with every ace at 11
        does not bust. A-A (22) is therefore hard 12.
        """
        return any(card.is_ace for card in self.cards) and self._raw_total <= 21

    @property
    def is_blackjack(self) -> bool:
        """Natural 21: two cards on a hand that did not come from a split."""
        return (
            len(self.cards) == 2
            and self.value == 21
            and not self.is_split
        )

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a pair (two cards of same rank)."""
        return (
            len(self.cards) == 2
            and self.cards[0].rank == self.cards[1].rank
        )

    @property
    def can_split(self) -> bool:
        """Check if the cards allow a split. Table limits are checked by the game."""
        return self.is_pair

    def can_double(self, allow_any_count: bool = False) -> bool:
        """Check if the hand may double down."""
        if self.is_doubled:
            return False
        return allow_any_count or len(self.cards) == 2

    @property
    def is_finished(self) -> bool:
        """Check if no further player action applies to this hand."""
        return self.is_stood or self.is_busted or self.is_surrendered

    @property
    def num_cards(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) if card.face_up else "??" for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value}, bet={self.bet})"


def compare_hands(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """
    Compare a finished player hand with the dealer's final hand by totals.

    Naturals are settled before this comparison is reached.
    """
    if player_hand.is_surrendered or player_hand.is_busted:
        return Outcome.LOSE

    if dealer_hand.is_busted:
        return Outcome.WIN

    player_value = player_hand.value
    dealer_value = dealer_hand.value
    if player_value > dealer_value:
        return Outcome.WIN
    if dealer_value > player_value:
        return Outcome.LOSE
    return Outcome.PUSH
