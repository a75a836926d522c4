"""
WOTC Credit Calculator - IRC Section 51, Form 5884.

Credit rules:
- < 120 hours: no credit
- 120-399 hours: 25% of qualified first-year wages
- 400+ hours: 40% of qualified first-year wages

Qualified wages are capped per target group:
- Standard groups: $6,000 first-year wages -> max $2,400
- Long-term TANF (IV-A): $10,000 first-year + $10,000 second-year at 50% -> max $9,000
- Disabled veteran (V-DISABLED): $12,000 -> max $4,800
- Disabled veteran unemployed 6+ months: $24,000 -> max $9,600
- Veteran unemployed 6+ months: $14,000 -> max $5,600
- Summer youth (XI): $3,000 -> max $1,200

The maximum credit caps the sum of both years, not each year separately.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from calculator.decimal_math import (
    Numeric, ZERO, add, capped_wages, min_decimal, money, multiply, non_negative, to_decimal, to_float
)
from rules.target_groups import RuleCatalog

logger = logging.getLogger(__name__)

MIN_QUALIFYING_HOURS = Decimal("120")
FULL_RATE_HOURS = Decimal("400")

PARTIAL_RATE = Decimal("0.25")
FULL_RATE = Decimal("0.40")

UNKNOWN_CATEGORY_NAME = "Unknown"


class HoursTier(str, Enum):
    """Hours-worked bands that set the credit percentage."""
    UNDER_120 = "0-119"
    FROM_120_TO_399 = "120-399"
    OVER_400 = "400+"


def hours_tier(hours_worked: Numeric) -> HoursTier:
    hours = to_decimal(hours_worked)
    if hours >= FULL_RATE_HOURS:
        return HoursTier.OVER_400
    if hours >= MIN_QUALIFYING_HOURS:
        return HoursTier.FROM_120_TO_399
    return HoursTier.UNDER_120


_TIER_RATES = {
    HoursTier.UNDER_120: ZERO,
    HoursTier.FROM_120_TO_399: PARTIAL_RATE,
    HoursTier.OVER_400: FULL_RATE,
}


@dataclass(frozen=True)
class CreditBreakdown:
    """Detailed breakdown of one employee's WOTC credit."""
    category_code: str
    category_name: str
    hours_worked: Decimal
    hours_tier: HoursTier = HoursTier.UNDER_120

    applied_percentage: Decimal = ZERO
    wage_cap: Decimal = ZERO

    qualified_first_year_wages: Decimal = ZERO
    qualified_second_year_wages: Decimal = ZERO

    first_year_credit: Decimal = ZERO
    second_year_credit: Decimal = ZERO
    total_credit: Decimal = ZERO  # min(first + second, max credit)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_credit": to_float(self.total_credit),
            "first_year_credit": to_float(self.first_year_credit),
            "second_year_credit": to_float(self.second_year_credit),
            "applied_percentage": to_float(self.applied_percentage),
            "qualified_first_year_wages": to_float(self.qualified_first_year_wages),
            "qualified_second_year_wages": to_float(self.qualified_second_year_wages),
            "wage_cap": to_float(self.wage_cap),
            "hours_worked": to_float(self.hours_worked),
            "hours_tier": self.hours_tier.value,
            "category_code": self.category_code,
            "category_name": self.category_name,
        }


class CreditCalculator:
    """
    Calculator for the tiered, capped WOTC credit.

    Unknown target groups and short hours produce a zero breakdown instead
    of an error; callers decide whether that is a client-facing failure.
    """

    def __init__(self, catalog: RuleCatalog):
        self.catalog = catalog

    def calculate(
        self,
        category_code: str,
        hours_worked: Numeric,
        first_year_wages: Numeric,
        second_year_wages: Optional[Numeric] = None,
    ) -> CreditBreakdown:
        """
        Calculate the credit for one certified hire.

        Args:
            category_code: Target group code
            hours_worked: Hours worked in the first year of employment
            first_year_wages: Wages paid in the first year
            second_year_wages: Wages paid in the second year (IV-A only)

        Returns:
            CreditBreakdown with every intermediate amount rounded to cents
        """
        hours = non_negative(hours_worked)
        category = self.catalog.lookup(category_code)

        if category is None:
            logger.debug(f"No target group {category_code!r}, returning zero credit")
            return CreditBreakdown(
                category_code=category_code,
                category_name=UNKNOWN_CATEGORY_NAME,
                hours_worked=hours,
            )

        tier = hours_tier(hours)
        if tier is HoursTier.UNDER_120:
            return CreditBreakdown(
                category_code=category.code,
                category_name=category.display_name,
                hours_worked=hours,
                wage_cap=money(category.qualified_wage_cap),
            )

        percentage = _TIER_RATES[tier]

        # Step 1: First-year credit on capped wages
        qualified_first = capped_wages(to_decimal(first_year_wages), category.qualified_wage_cap)
        first_credit = multiply(qualified_first, percentage)

        # Step 2: Second-year credit (multi-year groups only)
        qualified_second = ZERO
        second_credit = ZERO
        second_wages = non_negative(to_decimal(second_year_wages))
        if category.has_second_year and second_wages > ZERO:
            qualified_second = capped_wages(second_wages, category.second_year_wage_cap)
            second_credit = multiply(qualified_second, category.second_year_rate)

        # Step 3: Cap the combined credit
        total = min_decimal(add(first_credit, second_credit), category.max_credit)

        breakdown = CreditBreakdown(
            category_code=category.code,
            category_name=category.display_name,
            hours_worked=hours,
            hours_tier=tier,
            applied_percentage=percentage,
            wage_cap=money(category.qualified_wage_cap),
            qualified_first_year_wages=money(qualified_first),
            qualified_second_year_wages=money(qualified_second),
            first_year_credit=money(first_credit),
            second_year_credit=money(second_credit),
            total_credit=money(total),
        )
        logger.debug(
            f"WOTC credit {category.code}: {hours} hours ({tier.value}), "
            f"total {breakdown.total_credit}"
        )
        return breakdown

    def calculate_total(
        self,
        category_code: str,
        hours_worked: Numeric,
        first_year_wages: Numeric,
        second_year_wages: Optional[Numeric] = None,
    ) -> Decimal:
        """Total credit only."""
        return self.calculate(category_code, hours_worked, first_year_wages, second_year_wages).total_credit
