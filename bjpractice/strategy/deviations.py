"""Count-based strategy deviations (Illustrious 18 subset)."""

from dataclasses import dataclass
from typing import Mapping

from bjpractice.strategy.basic import Action

# Take insurance at or above this true count
INSURANCE_INDEX = 3


@dataclass(frozen=True)
class TotalKey:
    """Deviation keyed by the player's total against the dealer upcard."""

    player_total: int
    dealer_value: int  # 2-11 (11 = Ace)


@dataclass(frozen=True)
class TenPairKey:
    """Deviation for a pair of ten-value cards against the dealer upcard."""

    dealer_value: int


DeviationKey = TotalKey | TenPairKey


@dataclass(frozen=True)
class IndexPlay:
    """
    An index play (strategy deviation based on count).

    At or above ``threshold`` the play is ``action``. When ``below_action`` is
    set, a true count strictly below the threshold plays ``below_action``.
    """

    threshold: int
    action: Action
    below_action: Action | None = None
    description: str = ""

    def action_for(self, true_count: int) -> tuple[Action, bool] | None:
        """
        Return the indexed action for ``true_count`` and whether it came from
        the below-threshold branch, or None when the index does not fire.
        """
        if self.below_action is not None and true_count < self.threshold:
            return self.below_action, True
        if true_count >= self.threshold:
            return self.action, False
        return None


DEVIATION_INDICES: Mapping[DeviationKey, IndexPlay] = {
    TotalKey(16, 10): IndexPlay(0, Action.STAND, description="Stand on 16 vs 10 at TC 0 or higher"),
    TotalKey(15, 10): IndexPlay(4, Action.STAND, description="Stand on 15 vs 10 at TC +4 or higher"),
    TotalKey(10, 10): IndexPlay(4, Action.DOUBLE, description="Double 10 vs 10 at TC +4 or higher"),
    TotalKey(12, 3): IndexPlay(2, Action.STAND, description="Stand on 12 vs 3 at TC +2 or higher"),
    TotalKey(12, 2): IndexPlay(3, Action.STAND, description="Stand on 12 vs 2 at TC +3 or higher"),
    TotalKey(11, 11): IndexPlay(1, Action.DOUBLE, description="Double 11 vs A at TC +1 or higher"),
    TotalKey(9, 2): IndexPlay(1, Action.DOUBLE, description="Double 9 vs 2 at TC +1 or higher"),
    TotalKey(10, 11): IndexPlay(4, Action.DOUBLE, description="Double 10 vs A at TC +4 or higher"),
    TotalKey(9, 7): IndexPlay(3, Action.DOUBLE, description="Double 9 vs 7 at TC +3 or higher"),
    TotalKey(16, 9): IndexPlay(5, Action.STAND, description="Stand on 16 vs 9 at TC +5 or higher"),
    TotalKey(13, 2): IndexPlay(-1, Action.STAND, description="Stand on 13 vs 2 at TC -1 or higher"),
    TotalKey(12, 4): IndexPlay(
        0, Action.STAND, below_action=Action.HIT, description="Hit 12 vs 4 below TC 0"
    ),
    TotalKey(12, 5): IndexPlay(
        -2, Action.STAND, below_action=Action.HIT, description="Hit 12 vs 5 below TC -2"
    ),
    TotalKey(12, 6): IndexPlay(
        -1, Action.STAND, below_action=Action.HIT, description="Hit 12 vs 6 below TC -1"
    ),
    TotalKey(13, 3): IndexPlay(
        -2, Action.STAND, below_action=Action.HIT, description="Hit 13 vs 3 below TC -2"
    ),
    TenPairKey(5): IndexPlay(5, Action.SPLIT, description="Split 10s vs 5 at TC +5 or higher"),
    TenPairKey(6): IndexPlay(4, Action.SPLIT, description="Split 10s vs 6 at TC +4 or higher"),
}


@dataclass(frozen=True)
class DeviationInfo:
    """Advisory description of a deviation that applies at the current count."""

    is_deviation: bool
    threshold: int | None = None
    action: Action | None = None
    reason: str = ""


def _signed(n: int) -> str:
    return f"{n:+d}"


def find_deviation(
    player_total: int,
    dealer_value: int,
    true_count: int,
    is_ten_pair: bool = False,
    can_double: bool = True,
    can_split: bool = True,
) -> Action | None:
    """
    Find the deviation action for the given situation.

    Ten-pair splits are checked first and only when splitting is legal. A
    DOUBLE or SPLIT deviation that is not currently legal is suppressed so
    the caller falls through to basic strategy.

    Returns:
        The deviation action, or None when no index fires
    """
    if is_ten_pair and can_split:
        play = DEVIATION_INDICES.get(TenPairKey(dealer_value))
        if play is not None and true_count >= play.threshold:
            return play.action

    play = DEVIATION_INDICES.get(TotalKey(player_total, dealer_value))
    if play is None:
        return None

    fired = play.action_for(true_count)
    if fired is None:
        return None

    action, below = fired
    if not below:
        if action == Action.DOUBLE and not can_double:
            return None
        if action == Action.SPLIT and not can_split:
            return None
    return action


def explain_deviation(
    player_total: int,
    dealer_value: int,
    true_count: int,
    is_ten_pair: bool = False,
) -> DeviationInfo:
    """
    Describe which deviation applies at ``true_count``, for display.

    Same lookup order as ``find_deviation`` without the legality checks.
    """
    if is_ten_pair:
        play = DEVIATION_INDICES.get(TenPairKey(dealer_value))
        if play is not None and true_count >= play.threshold:
            return DeviationInfo(
                is_deviation=True,
                threshold=play.threshold,
                action=play.action,
                reason=f"TC {_signed(true_count)} >= {_signed(play.threshold)}",
            )

    play = DEVIATION_INDICES.get(TotalKey(player_total, dealer_value))
    if play is not None:
        fired = play.action_for(true_count)
        if fired is not None:
            action, below = fired
            comparison = "<" if below else ">="
            return DeviationInfo(
                is_deviation=True,
                threshold=play.threshold,
                action=action,
                reason=f"TC {_signed(true_count)} {comparison} {_signed(play.threshold)}",
            )

    return DeviationInfo(is_deviation=False)


def should_take_insurance(true_count: int) -> bool:
    """Check the insurance index."""
    return true_count >= INSURANCE_INDEX
