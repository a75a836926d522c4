"""
Tests for WOTC API endpoints.

Tests cover:
- /api/wotc/eligibility - Target group determination
- /api/wotc/credit - Credit breakdown, lenient and strict unknown groups
- /api/wotc/categories - Catalog listing and lookup
- /api/wotc/normalize - Label resolution
- /api/wotc/questionnaire/validate - Required-question check
"""

import pytest
from fastapi.testclient import TestClient
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from web.app import app
from web.wotc_api import get_engine


@pytest.fixture
def client(engine):
    """Create a test client wired to the built-in catalog."""
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestEligibilityEndpoint:

    def test_eligible(self, client, standard_questions):
        response = client.post(
            "/api/wotc/eligibility",
            json={"answers": {"q1": "Yes", "q4": "Yes"}, "questions": standard_questions},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_eligible"] is True
        assert data["matched_categories"] == ["IV-A", "IX"]
        assert data["primary_category"] == "IV-A"
        assert data["max_potential_credit"] == 9000.0

    def test_summer_youth_without_questions(self, client):
        response = client.post(
            "/api/wotc/eligibility",
            json={"date_of_birth": "2007-01-10", "hire_date": "2024-06-15"},
        )
        assert response.status_code == 200
        assert response.json()["matched_categories"] == ["XI"]

    def test_empty_body(self, client):
        response = client.post("/api/wotc/eligibility", json={})
        assert response.status_code == 200
        assert response.json()["is_eligible"] is False

    def test_malformed_question_skipped(self, client):
        response = client.post(
            "/api/wotc/eligibility",
            json={
                "answers": {"q1": "Yes"},
                "questions": [
                    {"question": "missing id", "targetGroup": "IX", "eligibilityTrigger": "Yes"},
                    {"id": "q1", "targetGroup": "V", "eligibilityTrigger": "Yes"},
                ],
            },
        )
        assert response.status_code == 200
        assert response.json()["matched_categories"] == ["V"]

    def test_invalid_date(self, client):
        response = client.post("/api/wotc/eligibility", json={"hire_date": "June"})
        assert response.status_code == 422

    def test_request_id_echoed(self, client):
        response = client.post(
            "/api/wotc/eligibility", json={}, headers={"X-Request-ID": "abc-123"}
        )
        assert response.headers["X-Request-ID"] == "abc-123"


class TestCreditEndpoint:

    def test_long_term_tanf(self, client):
        response = client.post(
            "/api/wotc/credit",
            json={
                "category_code": "IV-A",
                "hours_worked": 450,
                "first_year_wages": 12000,
                "second_year_wages": 11000,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total_credit"] == 9000.0
        assert data["first_year_credit"] == 4000.0
        assert data["second_year_credit"] == 5000.0
        assert data["hours_tier"] == "400+"

    def test_display_name(self, client):
        response = client.post(
            "/api/wotc/credit",
            json={"category_code": "Qualified Veteran", "hours_worked": 200, "first_year_wages": 4000},
        )
        data = response.json()
        assert data["category_code"] == "V"
        assert data["total_credit"] == 1000.0

    def test_unknown_lenient(self, client):
        response = client.post(
            "/api/wotc/credit",
            json={"category_code": "NOT_A_CODE", "hours_worked": 500, "first_year_wages": 10000},
        )
        assert response.status_code == 200
        assert response.json()["total_credit"] == 0.0

    def test_unknown_strict(self, client):
        response = client.post(
            "/api/wotc/credit",
            json={
                "category_code": "NOT_A_CODE",
                "hours_worked": 500,
                "first_year_wages": 10000,
                "strict": True,
            },
        )
        assert response.status_code == 404

    def test_negative_wages_rejected(self, client):
        response = client.post(
            "/api/wotc/credit",
            json={"category_code": "V", "hours_worked": 500, "first_year_wages": -1},
        )
        assert response.status_code == 422


class TestCatalogEndpoints:

    def test_list(self, client):
        response = client.get("/api/wotc/categories")
        assert response.status_code == 200
        codes = [c["code"] for c in response.json()["categories"]]
        assert codes[0] == "IV-A"
        assert len(codes) == 14

    def test_get(self, client):
        response = client.get("/api/wotc/categories/V-DISABLED")
        assert response.status_code == 200
        assert response.json()["max_credit"] == 4800.0

    def test_get_unknown(self, client):
        assert client.get("/api/wotc/categories/ZZ").status_code == 404

    def test_normalize(self, client):
        response = client.get("/api/wotc/normalize", params={"label": "food stamps"})
        assert response.json() == {"label": "food stamps", "code": "IX"}

    def test_normalize_miss(self, client):
        response = client.get("/api/wotc/normalize", params={"label": "astronaut"})
        assert response.json()["code"] is None


class TestQuestionnaireValidation:

    def test_missing_required(self, client, standard_questions):
        response = client.post(
            "/api/wotc/questionnaire/validate",
            json={"answers": {"q1": "Yes"}, "questions": standard_questions},
        )
        assert response.status_code == 200
        assert response.json() == {"valid": False, "missing_questions": ["q2", "q3", "q4", "q6"]}

    def test_hidden_follow_up_not_required(self, client):
        questions = [
            {"id": "vet", "required": True},
            {
                "id": "vet_branch",
                "required": True,
                "displayCondition": {"sourceQuestionId": "vet", "operator": "equals", "value": "Yes"},
            },
        ]
        response = client.post(
            "/api/wotc/questionnaire/validate",
            json={"answers": {"vet": "No"}, "questions": questions},
        )
        assert response.json() == {"valid": True, "missing_questions": []}

    def test_malformed_questionnaire_rejected(self, client):
        response = client.post(
            "/api/wotc/questionnaire/validate",
            json={"answers": {}, "questions": [{"question": "missing id"}]},
        )
        assert response.status_code == 422


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
