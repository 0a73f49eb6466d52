"""Tests for API endpoints."""

import pytest


class TestRootEndpoints:
    """Tests for service info endpoints."""

    def test_root(self, client):
        """Test root endpoint lists the API sections."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["endpoints"]["plans"] == "/plan"

    def test_health(self, client):
        """Test health check endpoint."""
        assert client.get("/health").json() == {"status": "healthy"}


class TestGuidelineEndpoints:
    """Tests for guideline API endpoints."""

    def test_list_diseases(self, client):
        """Test listing all supported diseases."""
        response = client.get("/guideline")
        assert response.status_code == 200
        data = response.json()
        assert [d["disease"] for d in data] == ["PKU", "MMA_PA", "MSUD", "GA", "UCD"]
        assert data[0]["primary_limiter"] == "PHE"

    def test_get_disease_guideline(self, client):
        """Test getting the full PKU table with display ranges."""
        response = client.get("/guideline/PKU")
        assert response.status_code == 200
        data = response.json()
        assert data["default_formulas"]["standard"] == "PKU_STD"
        assert len(data["guidelines"]) == len(data["age_groups"])
        tyr = next(n for n in data["guidelines"][0]["nutrients"] if n["nutrient"] == "TYR")
        assert tyr["min_only"] is True
        assert tyr["display"].startswith(">= ")

    def test_unknown_disease(self, client):
        """Test an unknown disease is rejected."""
        assert client.get("/guideline/XYZ").status_code == 422


class TestFormulaEndpoints:
    """Tests for formula catalog endpoints."""

    def test_list_options(self, client):
        """Test listing special formulas for PKU."""
        response = client.get("/formula", params={"disease": "PKU", "role": "special"})
        assert response.status_code == 200
        assert [f["id"] for f in response.json()] == ["PKU_SPEC"]

    def test_requires_filters(self, client):
        """Test disease and role filters are required."""
        assert client.get("/formula").status_code == 422


class TestPlanEndpoints:
    """Tests for plan computation."""

    def _payload(self, **overrides):
        payload = {
            "weight_kg": 5,
            "disease": "PKU",
            "age_group_index": 0,
            "standard": {"formula_id": "PKU_STD"},
            "special": {"formula_id": "PKU_SPEC"},
            "modular": {"formula_id": "MODULAR"},
        }
        payload.update(overrides)
        return payload

    def test_compute_plan(self, client):
        """Test computing a PKU plan with catalog formulas."""
        response = client.post("/plan/compute", json=self._payload(analysis_values={"PHE": 200}))
        assert response.status_code == 200
        data = response.json()

        assert data["age_label"] == "Birth to 3 months"
        assert data["target_mode"] == "MID"
        plan = data["formula_plan"]
        assert [item["role"] for item in plan["items"]] == ["standard", "special", "modular"]
        assert plan["primary_limiter"] == "PHE"
        assert plan["deficits"]["protein"] == pytest.approx(0, abs=1e-6)
        assert plan["items"][0]["scoops"] is not None
        assert data["highlights"]["primary_limit"]["unit"] == "mg/day"
        assert any(row["nutrient"] == "PHE" and row["daily_range"].endswith("mg/day") for row in data["rows"])
        assert data["analysis"]["items"][0]["nutrient"] == "PHE"

    def test_custom_formula(self, client):
        """Test computing a plan with a caregiver-entered formula."""
        payload = self._payload(
            standard={"custom": {"name": "Home formula", "kcal": 500, "protein": 11, "limiter": 400}},
            special=None,
            modular=None,
        )
        response = client.post("/plan/compute", json=payload)
        assert response.status_code == 200
        plan = response.json()["formula_plan"]
        assert plan["items"][0]["formula_name"] == "Home formula"
        assert "No modular formula selected while deficits exist." in plan["notes"]

    def test_unknown_formula(self, client):
        """Test an unknown formula id returns 404."""
        response = client.post("/plan/compute", json=self._payload(special={"formula_id": "NOPE"}))
        assert response.status_code == 404

    def test_formula_for_other_disease(self, client):
        """Test a formula tagged for another disease returns 400."""
        response = client.post("/plan/compute", json=self._payload(special={"formula_id": "MSUD_SPEC"}))
        assert response.status_code == 400

    def test_selection_needs_one_source(self, client):
        """Test a selection with both an id and a custom formula is rejected."""
        response = client.post(
            "/plan/compute",
            json=self._payload(standard={"formula_id": "PKU_STD", "custom": {"kcal": 500}}),
        )
        assert response.status_code == 422

    def test_negative_weight_rejected(self, client):
        """Test negative weight is rejected."""
        assert client.post("/plan/compute", json=self._payload(weight_kg=-1)).status_code == 422
