"""
WOTC Target Group Catalog.

A target group is one eligibility classification recognized by the Work
Opportunity Tax Credit program (IRS Form 8850 / ETA Form 9061), with its own
credit ceiling, minimum hours and qualified-wage caps.

The catalog is built once at startup, validated, and then shared read-only by
every screening and credit computation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ._decimal_utils import Numeric, ZERO, to_decimal, to_float

logger = logging.getLogger(__name__)


class CatalogValidationError(ValueError):
    """Raised when target group definitions are inconsistent."""
    pass


@dataclass(frozen=True)
class Category:
    """Individual WOTC target group definition."""
    code: str
    display_name: str
    max_credit: Decimal
    min_hours_threshold: int
    qualified_wage_cap: Decimal

    # Multi-year groups only (long-term TANF)
    second_year_wage_cap: Optional[Decimal] = None
    second_year_rate: Optional[Decimal] = None

    @classmethod
    def create(
        cls,
        code: str,
        display_name: str,
        max_credit: Numeric,
        min_hours_threshold: int,
        qualified_wage_cap: Numeric,
        second_year_wage_cap: Optional[Numeric] = None,
        second_year_rate: Optional[Numeric] = None,
    ) -> "Category":
        """Build a category from plain numbers (config files, literals)."""
        return cls(
            code=str(code).strip(),
            display_name=str(display_name).strip(),
            max_credit=to_decimal(max_credit),
            min_hours_threshold=int(min_hours_threshold),
            qualified_wage_cap=to_decimal(qualified_wage_cap),
            second_year_wage_cap=(
                to_decimal(second_year_wage_cap) if second_year_wage_cap is not None else None
            ),
            second_year_rate=(
                to_decimal(second_year_rate) if second_year_rate is not None else None
            ),
        )

    @property
    def has_second_year(self) -> bool:
        return self.second_year_wage_cap is not None and self.second_year_rate is not None

    def validation_errors(self) -> List[str]:
        errors = []
        if not self.code:
            errors.append("code must not be empty")
        if self.max_credit <= ZERO:
            errors.append(f"{self.code}: max_credit must be positive")
        if self.qualified_wage_cap <= ZERO:
            errors.append(f"{self.code}: qualified_wage_cap must be positive")
        if self.min_hours_threshold < 0:
            errors.append(f"{self.code}: min_hours_threshold must not be negative")
        if (self.second_year_wage_cap is None) != (self.second_year_rate is None):
            errors.append(
                f"{self.code}: second_year_wage_cap and second_year_rate must be set together"
            )
        if self.second_year_wage_cap is not None and self.second_year_wage_cap <= ZERO:
            errors.append(f"{self.code}: second_year_wage_cap must be positive")
        if self.second_year_rate is not None and self.second_year_rate <= ZERO:
            errors.append(f"{self.code}: second_year_rate must be positive")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for API responses."""
        return {
            "code": self.code,
            "display_name": self.display_name,
            "max_credit": to_float(self.max_credit),
            "min_hours_threshold": self.min_hours_threshold,
            "qualified_wage_cap": to_float(self.qualified_wage_cap),
            "second_year_wage_cap": (
                to_float(self.second_year_wage_cap) if self.second_year_wage_cap is not None else None
            ),
            "second_year_rate": (
                to_float(self.second_year_rate) if self.second_year_rate is not None else None
            ),
        }


class RuleCatalog:
    """
    Immutable registry of target groups keyed by code.

    Iteration follows declaration order, which is also the tie-break order
    used when two matched groups carry the same maximum credit.
    """

    def __init__(self, categories: Iterable[Category]):
        """
        Args:
            categories: Target group definitions in declaration order

        Raises:
            CatalogValidationError: duplicate codes or invalid caps/rates
        """
        ordered: Dict[str, Category] = {}
        errors: List[str] = []

        for category in categories:
            errors.extend(category.validation_errors())
            if category.code in ordered:
                errors.append(f"duplicate target group code: {category.code}")
                continue
            ordered[category.code] = category

        if errors:
            raise CatalogValidationError("; ".join(errors))

        self._categories = MappingProxyType(ordered)
        self._positions = MappingProxyType({code: i for i, code in enumerate(ordered)})
        logger.debug(f"Target group catalog built with {len(ordered)} groups")

    def lookup(self, code: Optional[str]) -> Optional[Category]:
        if not isinstance(code, str):
            return None
        return self._categories.get(code)

    def position(self, code: str) -> int:
        """Declaration index of a code; unknown codes sort last."""
        return self._positions.get(code, len(self._positions))

    def codes(self) -> Tuple[str, ...]:
        return tuple(self._categories)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code in self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"RuleCatalog({list(self._categories)})"
