"""
Default WOTC Target Groups.

IRS-defined target groups and wage caps for the 2024 program year
(IRC Section 51(d), Form 5884 instructions). Declaration order matters:
it is the tie-break order when two matched groups share a maximum credit.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from .target_groups import Category, RuleCatalog

logger = logging.getLogger(__name__)

DEFAULT_PROGRAM_YEAR = 2024

# Seasonal-youth group added by the age/hire-date override
SUMMER_YOUTH_CODE = "XI"


def get_default_target_groups(program_year: int = DEFAULT_PROGRAM_YEAR) -> List[Category]:
    """
    Get the built-in target groups for a program year.

    Caps have been unchanged since the 2015 PATH Act extension, so every
    year currently resolves to the same table.
    """
    if program_year != DEFAULT_PROGRAM_YEAR:
        logger.info(
            f"No dedicated target group table for {program_year}, "
            f"using {DEFAULT_PROGRAM_YEAR} caps"
        )

    return [
        # ======================================================================
        # TANF (Section 51(d)(2))
        # ======================================================================
        Category.create(
            code="IV-A",
            display_name="TANF Recipient (Long-term, 18+ months)",
            max_credit=9000,
            min_hours_threshold=400,
            qualified_wage_cap=10000,
            second_year_wage_cap=10000,
            second_year_rate="0.50",
        ),
        Category.create(
            code="IV-B",
            display_name="TANF Recipient (Short-term)",
            max_credit=2400,
            min_hours_threshold=120,
            qualified_wage_cap=6000,
        ),

        # ======================================================================
        # VETERANS (Section 51(d)(3))
        # ======================================================================
        Category.create(
            code="V",
            display_name="Qualified Veteran",
            max_credit=2400,
            min_hours_threshold=400,
            qualified_wage_cap=6000,
        ),
        Category.create(
            code="V-SNAP",
            display_name="Veteran (SNAP Recipient)",
            max_credit=2400,
            min_hours_threshold=400,
            qualified_wage_cap=6000,
        ),
        Category.create(
            code="V-DISABLED",
            display_name="Disabled Veteran (discharged past year)",
            max_credit=4800,
            min_hours_threshold=400,
            qualified_wage_cap=12000,
        ),
        Category.create(
            code="V-UNEMPLOYED",
            display_name="Veteran (unemployed 4 weeks to 6 months)",
            max_credit=2400,
            min_hours_threshold=400,
            qualified_wage_cap=6000,
        ),
        Category.create(
            code="V-UNEMPLOYED-6MO",
            display_name="Veteran (unemployed 6+ months)",
            max_credit=5600,
            min_hours_threshold=400,
            qualified_wage_cap=14000,
        ),
        Category.create(
            code="V-DISABLED-UNEMPLOYED",
            display_name="Disabled Veteran (unemployed 6+ months)",
            max_credit=9600,
            min_hours_threshold=400,
            qualified_wage_cap=24000,
        ),

        # ======================================================================
        # OTHER TARGET GROUPS
        # ======================================================================
        Category.create(
            code="VI",
            display_name="Ex-Felon",
            max_credit=2400,
            min_hours_threshold=400,
            qualified_wage_cap=6000,
        ),
        Category.create(
            code="VII",
            display_name="Designated Community Resident",
            max_credit=2400,
            min_hours_threshold=400,
            qualified_wage_cap=6000,
        ),
        Category.create(
            code="VIII",
            display_name="Vocational Rehabilitation Referral",
            max_credit=2400,
            min_hours_threshold=400,
            qualified_wage_cap=6000,
        ),
        Category.create(
            code="IX",
            display_name="SNAP Recipient (age 18-39)",
            max_credit=2400,
            min_hours_threshold=400,
            qualified_wage_cap=6000,
        ),
        Category.create(
            code="X",
            display_name="SSI Recipient",
            max_credit=2400,
            min_hours_threshold=400,
            qualified_wage_cap=6000,
        ),
        Category.create(
            code=SUMMER_YOUTH_CODE,
            display_name="Summer Youth Employee",
            max_credit=1200,
            min_hours_threshold=120,
            qualified_wage_cap=3000,
        ),
    ]


@lru_cache
def get_default_catalog(program_year: int = DEFAULT_PROGRAM_YEAR) -> RuleCatalog:
    """Cached, validated catalog of the built-in target groups."""
    return RuleCatalog(get_default_target_groups(program_year))
