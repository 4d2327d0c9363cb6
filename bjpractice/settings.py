"""Table settings: typed, range-clamped rule configuration."""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bjpractice.counting import CountingSystemName
from bjpractice.shoe import MAX_DECKS, MAX_PENETRATION, MIN_DECKS, MIN_PENETRATION
from config import config

MAX_STARTING_HANDS = 3
MIN_BLACKJACK_PAYOUT = 1.0
MAX_BLACKJACK_PAYOUT = 2.0


class UnknownSettingError(KeyError):
    """Raised when an update names a field TableSettings does not have."""


class TableSettings(BaseModel):
    """
    Blackjack table rules and player preferences.

    Numeric fields are clamped into their legal range rather than rejected;
    values of the wrong type fail validation.
    """

    model_config = ConfigDict(extra="ignore")

    deck_count: int = config.game.num_decks
    penetration: float = config.game.penetration
    dealer_hits_soft_17: bool = True
    blackjack_payout: float = config.game.blackjack_payout  # 3:2 = 1.5, 6:5 = 1.2
    double_after_split: bool = True
    resplit_aces: bool = False
    surrender_allowed: bool = True
    insurance_allowed: bool = True
    counting_enabled: bool = False
    counting_system: CountingSystemName = CountingSystemName.HI_LO
    min_bet: int = Field(default=config.game.min_bet, ge=1)
    max_bet: int = Field(default=config.game.max_bet, ge=1)
    auto_stand_on_21: bool = True
    num_hands: int = 1
    # True = American face-down hole card, False = every dealer card face-up
    dealer_hole_card: bool = True

    @field_validator("deck_count")
    @classmethod
    def _clamp_deck_count(cls, value: int) -> int:
        return max(MIN_DECKS, min(MAX_DECKS, value))

    @field_validator("penetration")
    @classmethod
    def _clamp_penetration(cls, value: float) -> float:
        return max(MIN_PENETRATION, min(MAX_PENETRATION, value))

    @field_validator("blackjack_payout")
    @classmethod
    def _clamp_payout(cls, value: float) -> float:
        return max(MIN_BLACKJACK_PAYOUT, min(MAX_BLACKJACK_PAYOUT, value))

    @field_validator("num_hands")
    @classmethod
    def _clamp_num_hands(cls, value: int) -> int:
        return max(1, min(MAX_STARTING_HANDS, value))

    @model_validator(mode="after")
    def _order_bet_limits(self) -> "TableSettings":
        if self.max_bet < self.min_bet:
            self.max_bet = self.min_bet
        return self

    def merged(self, changes: Mapping[str, Any]) -> "TableSettings":
        """
        Return a new settings object with ``changes`` applied field by field.

        Raises:
            UnknownSettingError: if a key is not a settings field
            pydantic.ValidationError: if a value has the wrong type
        """
        fields = type(self).model_fields
        data = self.model_dump()
        for name, value in changes.items():
            if name not in fields:
                raise UnknownSettingError(name)
            data[name] = value
        return type(self).model_validate(data)
