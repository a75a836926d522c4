from .wotc_credit import (
    CreditBreakdown,
    CreditCalculator,
    HoursTier,
    hours_tier,
)

__all__ = [
    "CreditBreakdown",
    "CreditCalculator",
    "HoursTier",
    "hours_tier",
]
