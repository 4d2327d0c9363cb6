"""Playing cards with blackjack values."""

from dataclasses import FrozenInstanceError, dataclass, field
from enum import Enum, auto


class Suit(Enum):
    """Card suits."""

    SPADES = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is printed in red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks, in natural deck order."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self.is_face:
            return 10
        return self.value

    @property
    def is_ace(self) -> bool:
        return self == Rank.ACE

    @property
    def is_face(self) -> bool:
        """Check if this rank is a Jack, Queen or King."""
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.blackjack_value == 10


_RANK_ALIASES = {
    "A": Rank.ACE,
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
}

_SUIT_ALIASES = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(slots=True)
class Card:
    """
    A playing card.

    Rank and suit identify the card; ``face_up`` is presentation state owned
    by the game engine and is ignored by equality and hashing.
    """

    rank: Rank
    suit: Suit
    face_up: bool = field(default=True, compare=False)

    def __setattr__(self, name: str, value: object) -> None:
        # Rank and suit are fixed once set; only face_up may change
        if name in ("rank", "suit") and hasattr(self, name):
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        object.__setattr__(self, name, value)

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @property
    def is_face_card(self) -> bool:
        return self.rank.is_face

    @property
    def is_ten_value(self) -> bool:
        return self.rank.is_ten_value

    @property
    def is_red(self) -> bool:
        return self.suit.is_red

    @property
    def color(self) -> str:
        return "red" if self.is_red else "black"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_ALIASES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_ALIASES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_ALIASES[rank_str], _SUIT_ALIASES[suit_str])
