"""Strategy advisor: recommends an action for a hand without touching state."""

from bjpractice.cards import Card
from bjpractice.hand import Hand
from bjpractice.strategy.basic import Action, BasicStrategy
from bjpractice.strategy.deviations import DeviationInfo, explain_deviation, find_deviation

_BASIC_STRATEGY = BasicStrategy()


def _is_ten_pair(hand: Hand) -> bool:
    return hand.is_pair and hand.cards[0].value == 10


def recommend(
    hand: Hand,
    dealer_upcard: Card,
    can_double: bool,
    can_split: bool,
    can_surrender: bool,
    true_count: int | None = None,
) -> Action:
    """
    Recommend HIT, STAND, DOUBLE, SPLIT or SURRENDER.

    With a true count, deviation indices are consulted first; otherwise, or
    when no index fires, basic strategy decides.
    """
    player_total = hand.value
    dealer_value = dealer_upcard.value

    if true_count is not None:
        deviation = find_deviation(
            player_total,
            dealer_value,
            true_count,
            is_ten_pair=_is_ten_pair(hand),
            can_double=can_double,
            can_split=can_split,
        )
        if deviation is not None:
            return deviation

    return _BASIC_STRATEGY.get_action(
        player_total=player_total,
        dealer_upcard=dealer_value,
        is_soft=hand.is_soft,
        pair_value=hand.cards[0].value if hand.is_pair else None,
        can_double=can_double,
        can_surrender=can_surrender,
        can_split=can_split,
    )


def deviation_for(hand: Hand, dealer_upcard: Card, true_count: int) -> DeviationInfo:
    """Report whether a count deviation applies to this hand, and why."""
    return explain_deviation(
        hand.value,
        dealer_upcard.value,
        true_count,
        is_ten_pair=_is_ten_pair(hand),
    )
