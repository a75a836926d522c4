"""Pytest configuration and fixtures for the WOTC test suite."""

import os
import sys
from pathlib import Path

import pytest

# Set test environment BEFORE any other imports
os.environ.setdefault("WOTC_ENVIRONMENT", "test")

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def catalog():
    """Built-in 2024 target group catalog."""
    from rules.default_target_groups import get_default_catalog
    return get_default_catalog()


@pytest.fixture
def engine(catalog):
    """Engine over the built-in catalog."""
    from services.wotc_engine import WOTCEngine
    return WOTCEngine(catalog)


@pytest.fixture
def standard_questions():
    """Yes/No questionnaire in the stored (authoring) JSON shape."""
    return [
        {
            "id": "q1",
            "question": "Have you received SNAP (Food Stamps) benefits in the last 6 months?",
            "type": "radio",
            "required": True,
            "options": ["Yes", "No"],
            "targetGroup": "IX",
            "eligibilityTrigger": "Yes",
        },
        {
            "id": "q2",
            "question": "Are you a veteran who has been unemployed for at least 4 weeks?",
            "type": "radio",
            "required": True,
            "options": ["Yes", "No"],
            "targetGroup": "V",
            "eligibilityTrigger": "Yes",
        },
        {
            "id": "q3",
            "question": "Have you received Supplemental Security Income (SSI) benefits?",
            "type": "radio",
            "required": True,
            "options": ["Yes", "No"],
            "targetGroup": "X",
            "eligibilityTrigger": "Yes",
        },
        {
            "id": "q4",
            "question": "Have you received TANF for 18 months or longer?",
            "type": "radio",
            "required": True,
            "options": ["Yes", "No"],
            "targetGroup": "IV-A",
            "eligibilityTrigger": "Yes",
        },
        {
            "id": "q5",
            "question": "What types of assistance have you received?",
            "type": "checkbox",
            "required": False,
            "options": ["SNAP/Food Stamps", "TANF", "SSI", "None"],
            "targetGroup": "IV-B",
            "eligibilityTrigger": ["TANF"],
        },
        {
            "id": "q6",
            "question": "What is your date of birth?",
            "type": "date",
            "required": True,
            "options": [],
        },
    ]
