"""Base class and identifiers for card counting systems."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Mapping

from bjpractice.cards import Rank


class CountingSystemName(str, Enum):
    """Identifiers of the supported counting systems."""

    HI_LO = "hi-lo"
    KO = "ko"
    OMEGA_II = "omega2"
    HI_OPT_I = "hi-opt1"
    HI_OPT_II = "hi-opt2"

    def __str__(self) -> str:
        return self.value


class CountingSystem(ABC):
    """
    A card counting system: a fixed tag value for every rank.

    Systems are stateless; the running count lives on the shoe so that it is
    reset together with the cards it describes.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the display name of the counting system."""
        ...

    @property
    @abstractmethod
    def identifier(self) -> CountingSystemName:
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """
        Return the tag value mapping for this system.

        Maps each Rank to its count value.
        """
        ...

    def tag(self, rank: Rank) -> int:
        """Return the tag value of a single rank."""
        return self.tag_values[rank]

    @property
    def full_deck_sum(self) -> int:
        """
        Calculate the sum of tag values for a full 52-card deck.

        For balanced systems, this should be 0.
        For unbalanced systems, this will be non-zero.
        """
        # Each rank appears once per suit
        return sum(self.tag_values[rank] * 4 for rank in Rank)

    @property
    def is_balanced(self) -> bool:
        """A balanced system sums to 0 over a complete deck."""
        return self.full_deck_sum == 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
