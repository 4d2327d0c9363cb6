"""Round phase enumeration."""

from enum import Enum


class GamePhase(Enum):
    """
    Round state machine phases.

    Flow: BETTING → DEALING → (INSURANCE) → PLAYER_TURN → DEALER_TURN → PAYOUT → GAME_OVER
    GAME_OVER means the round is over; ``new_round`` returns to BETTING.
    """

    BETTING = "betting"
    DEALING = "dealing"
    INSURANCE = "insurance"
    PLAYER_TURN = "player_turn"
    DEALER_TURN = "dealer_turn"
    PAYOUT = "payout"
    GAME_OVER = "game_over"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class ResultType(Enum):
    """Outcome reported for a resolved hand or a whole round."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    BLACKJACK = "blackjack"
    SURRENDER = "surrender"


# Valid phase transitions
VALID_TRANSITIONS: dict[GamePhase, list[GamePhase]] = {
    GamePhase.BETTING: [GamePhase.DEALING],
    GamePhase.DEALING: [GamePhase.INSURANCE, GamePhase.PLAYER_TURN, GamePhase.PAYOUT],
    GamePhase.INSURANCE: [GamePhase.PLAYER_TURN, GamePhase.PAYOUT],
    GamePhase.PLAYER_TURN: [GamePhase.DEALER_TURN, GamePhase.PAYOUT],
    GamePhase.DEALER_TURN: [GamePhase.PAYOUT],
    GamePhase.PAYOUT: [GamePhase.GAME_OVER],
    GamePhase.GAME_OVER: [GamePhase.BETTING],
}


def is_valid_transition(from_phase: GamePhase, to_phase: GamePhase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])
