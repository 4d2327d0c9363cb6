"""Strategy tables, deviations and the advisor."""

from bjpractice.strategy.basic import Action, BasicStrategy
from bjpractice.strategy.deviations import (
    DEVIATION_INDICES,
    INSURANCE_INDEX,
    DeviationInfo,
    IndexPlay,
    TenPairKey,
    TotalKey,
    explain_deviation,
    find_deviation,
    should_take_insurance,
)
from bjpractice.strategy.advisor import deviation_for, recommend

__all__ = [
    "Action",
    "BasicStrategy",
    "DEVIATION_INDICES",
    "INSURANCE_INDEX",
    "DeviationInfo",
    "IndexPlay",
    "TenPairKey",
    "TotalKey",
    "deviation_for",
    "explain_deviation",
    "find_deviation",
    "recommend",
    "should_take_insurance",
]
