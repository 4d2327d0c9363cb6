"""Knock-Out (KO) card counting system."""

from typing import Mapping

from bjpractice.cards import Rank
from bjpractice.counting.base import CountingSystem, CountingSystemName


class KOSystem(CountingSystem):
    """
    Knock-Out (KO) counting system.

    An unbalanced system that counts 7 as +1, unlike Hi-Lo.

    Tag values:
        2-7: +1
        8-9: 0
        10-A: -1

    Full deck sum: +4 (unbalanced)
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        Rank.ACE: -1,
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 1,
        Rank.FIVE: 1,
        Rank.SIX: 1,
        Rank.SEVEN: 1,  # Key difference from Hi-Lo
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -1,
        Rank.JACK: -1,
        Rank.QUEEN: -1,
        Rank.KING: -1,
    }

    @property
    def name(self) -> str:
        return "Knock-Out (KO)"

    @property
    def identifier(self) -> CountingSystemName:
        return CountingSystemName.KO

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
