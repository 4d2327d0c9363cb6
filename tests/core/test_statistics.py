"""Tests for session statistics."""

from decimal import Decimal

import pytest

from bjpractice.statistics import GameStats


class TestGameStats:
    """Tests for GameStats."""

    def test_defaults(self):
        stats = GameStats()
        assert stats.hands_played == 0
        assert stats.net_profit == Decimal("0")
        assert stats.win_rate == 0.0

    def test_win_rate(self):
        stats = GameStats(hands_played=8, hands_won=2)
        assert stats.win_rate == 0.25

    def test_to_dict_money_as_strings(self):
        """Money is serialized as strings so no precision is lost."""
        stats = GameStats(hands_played=3, total_wagered=Decimal("150.50"), net_profit=Decimal("-25"))
        data = stats.to_dict()
        assert data["hands_played"] == 3
        assert data["total_wagered"] == "150.50"
        assert data["net_profit"] == "-25"

    def test_round_trip(self):
        stats = GameStats(hands_played=10, hands_won=4, blackjacks=1, net_profit=Decimal("75.5"))
        assert GameStats.from_dict(stats.to_dict()) == stats

    def test_from_dict_missing_keys_keep_defaults(self):
        stats = GameStats.from_dict({"hands_won": 2})
        assert stats.hands_won == 2
        assert stats.hands_played == 0
        assert stats.total_wagered == Decimal("0")

    @pytest.mark.parametrize(
        "data",
        [{"hands_played": "many"}, {"net_profit": "lots"}, {"hands_won": None}],
    )
    def test_from_dict_rejects_bad_values(self, data):
        with pytest.raises(ValueError):
            GameStats.from_dict(data)
