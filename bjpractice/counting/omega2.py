"""Omega II card counting system."""

from typing import Mapping

from bjpractice.cards import Rank
from bjpractice.counting.base import CountingSystem, CountingSystemName


class Omega2System(CountingSystem):
    """
    Omega II counting system.

    A multi-level balanced system. Aces are neutral.

    Tag values:
        2, 3, 7: +1
        4, 5, 6: +2
        8, A: 0
        9: -1
        10-K: -2
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        Rank.ACE: 0,
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 2,
        Rank.FIVE: 2,
        Rank.SIX: 2,
        Rank.SEVEN: 1,
        Rank.EIGHT: 0,
        Rank.NINE: -1,
        Rank.TEN: -2,
        Rank.JACK: -2,
        Rank.QUEEN: -2,
        Rank.KING: -2,
    }

    @property
    def name(self) -> str:
        return "Omega II"

    @property
    def identifier(self) -> CountingSystemName:
        return CountingSystemName.OMEGA_II

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
