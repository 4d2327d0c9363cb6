"""Running session statistics."""

from dataclasses import asdict, dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping


@dataclass
class GameStats:
    """Per-hand results and money totals since the last reset."""

    hands_played: int = 0
    hands_won: int = 0
    hands_lost: int = 0
    hands_pushed: int = 0
    hands_surrendered: int = 0
    blackjacks: int = 0
    total_wagered: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")

    @property
    def win_rate(self) -> float:
        """Fraction of played hands that won."""
        if self.hands_played == 0:
            return 0.0
        return self.hands_won / self.hands_played

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-safe dictionary (money as strings)."""
        data = asdict(self)
        data["total_wagered"] = str(self.total_wagered)
        data["net_profit"] = str(self.net_profit)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameStats":
        """
        Create from a dictionary, keeping defaults for missing keys.

        Raises:
            ValueError: if a value cannot be converted
        """
        stats = cls()
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            try:
                if f.type is Decimal:
                    value = Decimal(str(value))
                else:
                    value = int(value)
            except (InvalidOperation, TypeError) as exc:
                raise ValueError(f"Invalid value for {f.name}: {value!r}") from exc
            setattr(stats, f.name, value)
        return stats
