"""Hi-Opt I and Hi-Opt II card counting systems."""

from typing import Mapping

from bjpractice.cards import Rank
from bjpractice.counting.base import CountingSystem, CountingSystemName


class HiOpt1System(CountingSystem):
    """
    Hi-Opt I counting system.

    Single-level and balanced; both the ace and the deuce are neutral.

    Tag values:
        3-6: +1
        2, 7-9, A: 0
        10-K: -1
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        Rank.ACE: 0,
        Rank.TWO: 0,
        Rank.THREE: 1,
        Rank.FOUR: 1,
        Rank.FIVE: 1,
        Rank.SIX: 1,
        Rank.SEVEN: 0,
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -1,
        Rank.JACK: -1,
        Rank.QUEEN: -1,
        Rank.KING: -1,
    }

    @property
    def name(self) -> str:
        return "Hi-Opt I"

    @property
    def identifier(self) -> CountingSystemName:
        return CountingSystemName.HI_OPT_I

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES


class HiOpt2System(CountingSystem):
    """
    Hi-Opt II counting system.

    Tag values:
        2, 3, 6, 7: +1
        4, 5: +2
        8, 9, A: 0
        10-K: -2
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        Rank.ACE: 0,
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 2,
        Rank.FIVE: 2,
        Rank.SIX: 1,
        Rank.SEVEN: 1,
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -2,
        Rank.JACK: -2,
        Rank.QUEEN: -2,
        Rank.KING: -2,
    }

    @property
    def name(self) -> str:
        return "Hi-Opt II"

    @property
    def identifier(self) -> CountingSystemName:
        return CountingSystemName.HI_OPT_II

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
