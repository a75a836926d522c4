"""
Tests for the WOTC engine facade.
"""

import pytest
from decimal import Decimal
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config.settings import EngineSettings
from services.wotc_engine import WOTCEngine, get_wotc_engine


class TestEngineOperations:
    """Tests for the four exposed operations."""

    def test_evaluate_eligibility(self, engine, standard_questions):
        result = engine.evaluate_eligibility({"q2": "Yes"}, standard_questions)
        assert result.primary_category == "V"

    def test_compute_credit_by_code(self, engine):
        assert engine.compute_credit("V", 450, 7000).total_credit == Decimal("2400.00")

    def test_compute_credit_by_display_name(self, engine):
        result = engine.compute_credit("Disabled Veteran (discharged past year)", 450, 20000)
        assert result.category_code == "V-DISABLED"
        assert result.total_credit == Decimal("4800.00")

    def test_compute_credit_by_alias(self, engine):
        assert engine.compute_credit("food stamps", 400, 1000).category_code == "IX"

    def test_compute_credit_unknown(self, engine):
        result = engine.compute_credit("NOT_A_CODE", 500, 10000)
        assert result.total_credit == Decimal("0")
        assert result.category_name == "Unknown"

    def test_normalize_category_code(self, engine):
        assert engine.normalize_category_code("SSI recipients") == "X"
        assert engine.normalize_category_code("nobody") is None

    def test_lookup_category(self, engine):
        assert engine.lookup_category("XI").display_name == "Summer Youth Employee"
        assert engine.lookup_category("XII") is None

    def test_validate_answers(self, engine, standard_questions):
        assert not engine.validate_answers({}, standard_questions).valid


class TestEngineConstruction:
    """Tests for settings-driven construction."""

    def test_from_settings_builtin(self):
        engine = WOTCEngine.from_settings(EngineSettings(_env_file=None))
        assert len(engine.catalog) == 14
        assert engine.evaluator.skip_falsy_answers is True

    def test_from_settings_with_file(self, tmp_path):
        path = tmp_path / "groups.yaml"
        path.write_text(
            "target_groups:\n"
            "  - code: V\n"
            "    display_name: Qualified Veteran\n"
            "    max_credit: 2400\n"
            "    min_hours_threshold: 400\n"
            "    qualified_wage_cap: 6000\n",
            encoding="utf-8",
        )
        settings = EngineSettings(_env_file=None, catalog_file=path, skip_falsy_answers=False)
        engine = WOTCEngine.from_settings(settings)
        assert engine.catalog.codes() == ("V",)
        assert engine.evaluator.skip_falsy_answers is False

    def test_get_wotc_engine_cached(self):
        assert get_wotc_engine() is get_wotc_engine()

    def test_engine_is_shareable_across_threads(self, engine, standard_questions):
        from concurrent.futures import ThreadPoolExecutor

        def work(i):
            answers = {"q4": "Yes"} if i % 2 else {"q1": "Yes"}
            return engine.evaluate_eligibility(answers, standard_questions).primary_category

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(40)))
        assert results == ["IX" if i % 2 == 0 else "IV-A" for i in range(40)]
