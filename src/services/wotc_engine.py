"""
WOTC Engine - the four operations consumed by screening, credit and export
workflows.

One engine owns one validated catalog and the components built on it. It
holds no per-call state, so a single instance is shared across threads and
request handlers.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Iterable, Mapping, Optional

from calculator.decimal_math import Numeric
from calculator.wotc_credit import CreditBreakdown, CreditCalculator
from config.catalog_loader import load_catalog
from config.settings import EngineSettings, get_settings
from rules.target_groups import Category, RuleCatalog
from screening.code_normalizer import CodeNormalizer
from screening.eligibility import DateInput, EligibilityEvaluator, EligibilityResult
from screening.validation import RequiredAnswersReport, validate_required_answers

logger = logging.getLogger(__name__)


class WOTCEngine:
    """Facade over eligibility evaluation and credit calculation."""

    def __init__(self, catalog: RuleCatalog, skip_falsy_answers: bool = True):
        self.catalog = catalog
        self.normalizer = CodeNormalizer(catalog)
        self.evaluator = EligibilityEvaluator(
            catalog,
            normalizer=self.normalizer,
            skip_falsy_answers=skip_falsy_answers,
        )
        self.calculator = CreditCalculator(catalog)

    @classmethod
    def from_settings(cls, settings: Optional[EngineSettings] = None) -> "WOTCEngine":
        settings = settings or get_settings()
        catalog = load_catalog(settings.catalog_file, settings.program_year)
        logger.info(
            f"WOTC engine ready: {len(catalog)} target groups, "
            f"program year {settings.program_year}"
        )
        return cls(catalog, skip_falsy_answers=settings.skip_falsy_answers)

    def evaluate_eligibility(
        self,
        answers: Optional[Mapping[str, Any]],
        questions: Optional[Iterable[Any]],
        date_of_birth: DateInput = None,
        hire_date: DateInput = None,
    ) -> EligibilityResult:
        return self.evaluator.evaluate(answers, questions, date_of_birth, hire_date)

    def compute_credit(
        self,
        category_code: str,
        hours_worked: Numeric,
        first_year_wages: Numeric,
        second_year_wages: Optional[Numeric] = None,
    ) -> CreditBreakdown:
        """
        Credit for a certified hire.

        Records often store the target group display name rather than the
        code, so the label is normalized first; unresolvable labels fall
        through to the calculator's zero breakdown.
        """
        code = self.normalizer.normalize(category_code) or category_code
        return self.calculator.calculate(code, hours_worked, first_year_wages, second_year_wages)

    def normalize_category_code(self, label: Any) -> Optional[str]:
        return self.normalizer.normalize(label)

    def lookup_category(self, code: Any) -> Optional[Category]:
        return self.catalog.lookup(code)

    def validate_answers(
        self,
        answers: Optional[Mapping[str, Any]],
        questions: Optional[Iterable[Any]],
    ) -> RequiredAnswersReport:
        return validate_required_answers(answers, questions)


@lru_cache
def get_wotc_engine() -> WOTCEngine:
    """Process-wide engine built from the cached settings."""
    return WOTCEngine.from_settings()
