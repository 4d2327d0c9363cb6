"""Basic strategy tables for blackjack."""

from enum import Enum, auto
from typing import Mapping


class Action(Enum):
    """Possible player actions."""

    HIT = auto()
    STAND = auto()
    DOUBLE = auto()
    SPLIT = auto()
    SURRENDER = auto()

    # Conditional actions (fallback if primary not allowed)
    DOUBLE_OR_HIT = auto()  # Double if allowed, else hit
    DOUBLE_OR_STAND = auto()  # Double if allowed, else stand
    SURRENDER_OR_HIT = auto()  # Surrender if allowed, else hit

    def __str__(self) -> str:
        return self.name.replace("_", "/")


# Type aliases for clarity
DealerUpcard = int  # 2-11 (11 = Ace)
PlayerTotal = int  # Hard total, soft total, or pair card value
TableKey = tuple[PlayerTotal, DealerUpcard]

ALL_UPCARDS = range(2, 12)


class BasicStrategy:
    """
    Basic strategy lookup tables.

    Pre-computed dictionaries for O(1) lookup, consulted in the order
    pairs -> soft totals -> hard totals.
    """

    def __init__(self) -> None:
        self._hard_table = self._build_hard_table()
        self._soft_table = self._build_soft_table()
        self._pair_table = self._build_pair_table()

    def get_action(
        self,
        player_total: int,
        dealer_upcard: int,
        is_soft: bool = False,
        pair_value: int | None = None,
        can_double: bool = True,
        can_surrender: bool = True,
        can_split: bool = True,
    ) -> Action:
        """
        Get the basic strategy action.

        Args:
            player_total: Player's hand total
            dealer_upcard: Dealer's upcard value (2-11, Ace=11)
            is_soft: Whether the hand is soft
            pair_value: Card value of a paired hand (2-11), None if not a pair
            can_double: Whether doubling is allowed
            can_surrender: Whether surrender is allowed
            can_split: Whether splitting is allowed

        Returns:
            The recommended action, never a conditional one
        """
        if pair_value is not None and can_split:
            action = self._pair_table.get((pair_value, dealer_upcard))
            if action:
                return self._resolve_action(action, can_double, can_surrender)

        if is_soft:
            action = self._soft_table.get((player_total, dealer_upcard), Action.HIT)
            return self._resolve_action(action, can_double, can_surrender)

        action = self._hard_table.get((player_total, dealer_upcard))
        if action:
            return self._resolve_action(action, can_double, can_surrender)

        if player_total >= 17:
            return Action.STAND
        return Action.HIT

    def _resolve_action(
        self,
        action: Action,
        can_double: bool,
        can_surrender: bool,
    ) -> Action:
        """Resolve conditional actions based on what's allowed."""
        if action == Action.DOUBLE_OR_HIT:
            return Action.DOUBLE if can_double else Action.HIT
        if action == Action.DOUBLE_OR_STAND:
            return Action.DOUBLE if can_double else Action.STAND
        if action == Action.SURRENDER_OR_HIT:
            return Action.SURRENDER if can_surrender else Action.HIT
        return action

    def _build_hard_table(self) -> Mapping[TableKey, Action]:
        """Build hard totals strategy table."""
        H = Action.HIT
        S = Action.STAND
        D = Action.DOUBLE_OR_HIT
        Rh = Action.SURRENDER_OR_HIT

        table: dict[TableKey, Action] = {}

        # Hard 4-8: Always hit
        for total in range(4, 9):
            for dealer in ALL_UPCARDS:
                table[(total, dealer)] = H

        # Hard 9
        for dealer in ALL_UPCARDS:
            table[(9, dealer)] = D if 3 <= dealer <= 6 else H

        # Hard 10
        for dealer in ALL_UPCARDS:
            table[(10, dealer)] = D if dealer <= 9 else H

        # Hard 11
        for dealer in ALL_UPCARDS:
            table[(11, dealer)] = D

        # Hard 12
        for dealer in ALL_UPCARDS:
            table[(12, dealer)] = S if 4 <= dealer <= 6 else H

        # Hard 13-16
        for total in range(13, 17):
            for dealer in ALL_UPCARDS:
                table[(total, dealer)] = S if dealer <= 6 else H

        # Surrender carve-outs
        table[(16, 9)] = Rh
        table[(16, 10)] = Rh
        table[(16, 11)] = Rh
        table[(15, 10)] = Rh

        # Hard 17+: Always stand
        for total in range(17, 22):
            for dealer in ALL_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_soft_table(self) -> Mapping[TableKey, Action]:
        """Build soft totals strategy table."""
        H = Action.HIT
        S = Action.STAND
        D = Action.DOUBLE_OR_HIT
        Ds = Action.DOUBLE_OR_STAND

        table: dict[TableKey, Action] = {}

        # Soft 13-14 (A,2 / A,3)
        for total in (13, 14):
            for dealer in ALL_UPCARDS:
                table[(total, dealer)] = D if 5 <= dealer <= 6 else H

        # Soft 15-16 (A,4 / A,5)
        for total in (15, 16):
            for dealer in ALL_UPCARDS:
                table[(total, dealer)] = D if 4 <= dealer <= 6 else H

        # Soft 17 (A,6)
        for dealer in ALL_UPCARDS:
            table[(17, dealer)] = D if 3 <= dealer <= 6 else H

        # Soft 18 (A,7)
        for dealer in ALL_UPCARDS:
            if dealer <= 6:
                table[(18, dealer)] = Ds
            elif dealer <= 8:
                table[(18, dealer)] = S
            else:
                table[(18, dealer)] = H

        # Soft 19-21: Always stand
        for total in range(19, 22):
            for dealer in ALL_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_pair_table(self) -> Mapping[TableKey, Action]:
        """Build pair splitting strategy table, keyed by the paired card's value."""
        H = Action.HIT
        S = Action.STAND
        P = Action.SPLIT
        D = Action.DOUBLE_OR_HIT

        table: dict[TableKey, Action] = {}

        for dealer in ALL_UPCARDS:
            # Aces and 8s: Always split
            table[(11, dealer)] = P
            table[(8, dealer)] = P
            table[(2, dealer)] = P if dealer <= 7 else H
            table[(3, dealer)] = P if dealer <= 7 else H
            table[(4, dealer)] = P if dealer in (5, 6) else H
            # 5s: Never split, play as hard 10
            table[(5, dealer)] = D if dealer <= 9 else H
            table[(6, dealer)] = P if dealer <= 6 else H
            table[(7, dealer)] = P if dealer <= 7 else H
            table[(9, dealer)] = S if dealer in (7, 10, 11) else P
            # 10s: Never split
            table[(10, dealer)] = S

        return table

    @property
    def hard_table(self) -> Mapping[TableKey, Action]:
        """Return the hard totals strategy table."""
        return self._hard_table

    @property
    def soft_table(self) -> Mapping[TableKey, Action]:
        """Return the soft totals strategy table."""
        return self._soft_table

    @property
    def pair_table(self) -> Mapping[TableKey, Action]:
        """Return the pair splitting strategy table."""
        return self._pair_table
