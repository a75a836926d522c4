"""
WOTC Routes - Screening Eligibility and Credit Calculation

Routes:
- POST /api/wotc/eligibility - Target group determination from questionnaire answers
- POST /api/wotc/credit - Credit breakdown for a certified hire
- GET /api/wotc/categories - Target group catalog
- GET /api/wotc/categories/{code} - One target group
- GET /api/wotc/normalize - Resolve a label to a target group code
- POST /api/wotc/questionnaire/validate - Required-question check
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, ValidationError

from config.settings import get_settings
from services.wotc_engine import WOTCEngine, get_wotc_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix=get_settings().api_prefix, tags=["WOTC"])


def get_engine() -> WOTCEngine:
    """Engine dependency; overridden in tests."""
    return get_wotc_engine()


# =============================================================================
# REQUEST MODELS
# =============================================================================

class EligibilityRequest(BaseModel):
    answers: Dict[str, Any] = Field(default_factory=dict, description="Question id to answer")
    questions: List[Dict[str, Any]] = Field(default_factory=list, description="Questionnaire questions")
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None


class CreditRequest(BaseModel):
    category_code: str = Field(description="Target group code or display name")
    hours_worked: float = Field(ge=0)
    first_year_wages: float = Field(ge=0)
    second_year_wages: Optional[float] = Field(default=None, ge=0)
    strict: bool = Field(default=False, description="404 instead of zero credit for unknown groups")


class QuestionnaireValidationRequest(BaseModel):
    answers: Dict[str, Any] = Field(default_factory=dict)
    questions: List[Dict[str, Any]] = Field(default_factory=list)


# =============================================================================
# ROUTES
# =============================================================================

@router.post("/eligibility")
async def evaluate_eligibility(body: EligibilityRequest, engine: WOTCEngine = Depends(get_engine)):
    """Determine which target groups the applicant qualifies for."""
    result = engine.evaluate_eligibility(
        body.answers, body.questions, body.date_of_birth, body.hire_date
    )
    logger.info(
        f"Eligibility evaluated: eligible={result.is_eligible} "
        f"primary={result.primary_category}"
    )
    return result.to_dict()


@router.post("/credit")
async def compute_credit(body: CreditRequest, engine: WOTCEngine = Depends(get_engine)):
    """Calculate the credit breakdown for a certified hire."""
    if body.strict and engine.normalize_category_code(body.category_code) is None:
        raise HTTPException(status_code=404, detail=f"Unknown target group: {body.category_code}")

    breakdown = engine.compute_credit(
        body.category_code,
        body.hours_worked,
        body.first_year_wages,
        body.second_year_wages,
    )
    return breakdown.to_dict()


@router.get("/categories")
async def list_categories(engine: WOTCEngine = Depends(get_engine)):
    return {"categories": [category.to_dict() for category in engine.catalog]}


@router.get("/categories/{code}")
async def get_category(code: str, engine: WOTCEngine = Depends(get_engine)):
    category = engine.lookup_category(code)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Unknown target group: {code}")
    return category.to_dict()


@router.get("/normalize")
async def normalize_label(label: str = Query(..., min_length=1), engine: WOTCEngine = Depends(get_engine)):
    return {"label": label, "code": engine.normalize_category_code(label)}


@router.post("/questionnaire/validate")
async def validate_questionnaire(
    body: QuestionnaireValidationRequest,
    engine: WOTCEngine = Depends(get_engine),
):
    try:
        report = engine.validate_answers(body.answers, body.questions)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid questionnaire: {e.error_count()} errors")
    return {"valid": report.valid, "missing_questions": report.missing_questions}
