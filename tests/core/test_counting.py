"""Tests for card counting systems."""

import pytest

from bjpractice.cards import Rank
from bjpractice.counting import COUNTING_SYSTEMS, CountingSystemName

# Expected tags, ordered A, 2-9, 10, J, Q, K
EXPECTED_TAGS = {
    "hilo": [-1, 1, 1, 1, 1, 1, 0, 0, 0, -1, -1, -1, -1],
    "ko": [-1, 1, 1, 1, 1, 1, 1, 0, 0, -1, -1, -1, -1],
    "omega2": [0, 1, 1, 2, 2, 2, 1, 0, -1, -2, -2, -2, -2],
    "hiopt1": [0, 0, 1, 1, 1, 1, 0, 0, 0, -1, -1, -1, -1],
    "hiopt2": [0, 1, 1, 2, 2, 1, 1, 0, 0, -2, -2, -2, -2],
}

ALL_SYSTEMS = list(EXPECTED_TAGS)


class TestHiLo:
    """Tests for Hi-Lo counting system."""

    def test_full_deck_sums_to_zero(self, hilo):
        """Verify Hi-Lo is balanced (full deck = 0)."""
        assert hilo.full_deck_sum == 0

    def test_is_balanced(self, hilo):
        """Test system reports as balanced."""
        assert hilo.is_balanced

    def test_low_cards_positive(self, hilo):
        """Test low cards (2-6) are +1."""
        for rank in [Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX]:
            assert hilo.tag(rank) == 1

    def test_neutral_cards_zero(self, hilo):
        """Test neutral cards (7-9) are 0."""
        for rank in [Rank.SEVEN, Rank.EIGHT, Rank.NINE]:
            assert hilo.tag(rank) == 0

    def test_high_cards_negative(self, hilo):
        """Test high cards (10-A) are -1."""
        for rank in [Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE]:
            assert hilo.tag(rank) == -1


class TestKO:
    """Tests for KO counting system."""

    def test_full_deck_sums_to_four(self, ko):
        """Verify KO is unbalanced (full deck = +4)."""
        assert ko.full_deck_sum == 4

    def test_is_not_balanced(self, ko):
        """Test system reports as unbalanced."""
        assert not ko.is_balanced

    def test_seven_is_positive(self, ko):
        """Test that 7 is +1 in KO (unlike Hi-Lo)."""
        assert ko.tag(Rank.SEVEN) == 1


class TestOmega2:
    """Tests for Omega II counting system."""

    def test_is_balanced(self, omega2):
        assert omega2.full_deck_sum == 0
        assert omega2.is_balanced

    def test_multi_level_values(self, omega2):
        """Test multi-level tag values."""
        assert omega2.tag(Rank.FOUR) == 2
        assert omega2.tag(Rank.NINE) == -1
        assert omega2.tag(Rank.QUEEN) == -2
        assert omega2.tag(Rank.ACE) == 0


class TestHiOpt:
    """Tests for the Hi-Opt systems."""

    def test_hiopt1_neutral_ace_and_deuce(self, hiopt1):
        assert hiopt1.tag(Rank.ACE) == 0
        assert hiopt1.tag(Rank.TWO) == 0
        assert hiopt1.is_balanced

    def test_hiopt2_levels(self, hiopt2):
        assert hiopt2.tag(Rank.FIVE) == 2
        assert hiopt2.tag(Rank.SIX) == 1
        assert hiopt2.tag(Rank.KING) == -2
        assert hiopt2.is_balanced


class TestCountingSystemCommon:
    """Common tests for all counting systems."""

    @pytest.mark.parametrize("system_fixture", ALL_SYSTEMS)
    def test_tag_table(self, system_fixture, request):
        """Every rank carries exactly its published weight."""
        system = request.getfixturevalue(system_fixture)
        assert [system.tag(rank) for rank in Rank] == EXPECTED_TAGS[system_fixture]

    @pytest.mark.parametrize("system_fixture", ALL_SYSTEMS)
    def test_system_name(self, system_fixture, request):
        """Test system has a name."""
        system = request.getfixturevalue(system_fixture)
        assert len(system.name) > 0

    def test_only_ko_unbalanced(self):
        unbalanced = [name for name, system in COUNTING_SYSTEMS.items() if not system.is_balanced]
        assert unbalanced == [CountingSystemName.KO]

    def test_registry_keys(self):
        """Systems are looked up by their identifier."""
        assert set(COUNTING_SYSTEMS) == set(CountingSystemName)
        assert COUNTING_SYSTEMS[CountingSystemName("hi-opt2")].name == "Hi-Opt II"
