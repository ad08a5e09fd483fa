"""웹 API 엔드포인트 테스트 (/api/ordering)"""

import io
from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest
from openpyxl import load_workbook

from src.application.services.ordering_service import StatisticalOrderingService
from src.domain.models import MealPlanEntry
from src.settings.ordering_config import OrderingConfig
from src.utils.date_utils import weekday_name
from src.web.app import create_app


@pytest.fixture
def live_client(sample_source):
    """실행일 기준 대상 기간에 식단이 있는 앱 (요청 처리 시 date.today() 사용)"""
    plan_date = (date.today() + timedelta(days=3)).isoformat()
    sample_source.meal_plan = [
        MealPlanEntry(date=plan_date, weekday=weekday_name(plan_date), menu_code="M001",
                      menu_name="제육볶음", planned_qty=120),
    ]
    service = StatisticalOrderingService(source=sample_source, config=OrderingConfig.default())
    app = create_app(service=service, config={"TESTING": True})
    return app.test_client()


class TestRecommendationAPI:

    @pytest.mark.integration
    def test_recommendation(self, live_client):
        resp = live_client.get("/api/ordering/recommendation")
        assert resp.status_code == 200

        body = resp.get_json()
        assert body["success"] is True
        data = body["data"]
        assert data["totalItems"] == 2
        assert data["orderDate"] == date.today().isoformat()
        item = data["items"][0]
        for key in ("ingredientCode", "grossRequirement", "safetyStock", "netRequirement",
                    "orderQty", "daysOfStock", "status", "statusMessage", "contributingMenus"):
            assert key in item

    @pytest.mark.integration
    def test_all_sources_failing_reported(self, make_source):
        source = make_source(failing={
            "meal_plan", "sales_history", "bom_lines", "ingredients", "current_inventory", "in_transit",
        })
        app = create_app(service=StatisticalOrderingService(source=source, config=OrderingConfig.default()),
                         config={"TESTING": True})

        data = app.test_client().get("/api/ordering/recommendation").get_json()["data"]

        assert data["items"] == []
        assert data["inputsEmpty"] is True
        assert len(data["sourceErrors"]) == 6

    @pytest.mark.integration
    def test_healthy_recommendation_not_flagged(self, live_client):
        data = live_client.get("/api/ordering/recommendation").get_json()["data"]
        assert data["inputsEmpty"] is False
        assert data["sourceErrors"] == []

    @pytest.mark.integration
    def test_security_headers(self, client):
        resp = client.get("/api/ordering/config")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"


class TestDataAPI:

    @pytest.mark.integration
    def test_meal_plan_with_period(self, client):
        resp = client.get("/api/ordering/meal-plan?startDate=2026-10-21&endDate=2026-10-28")
        body = resp.get_json()

        assert resp.status_code == 200
        assert [m["menuCode"] for m in body["data"]] == ["M001", "M002"]
        assert body["startDate"] == "2026-10-21"

    @pytest.mark.integration
    def test_meal_plan_invalid_date(self, client):
        resp = client.get("/api/ordering/meal-plan?startDate=abc")
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False

    @pytest.mark.integration
    def test_meal_plan_reversed_period(self, client):
        resp = client.get("/api/ordering/meal-plan?startDate=2026-10-28&endDate=2026-10-21")
        assert resp.status_code == 400

    @pytest.mark.integration
    def test_sales_stats(self, client):
        resp = client.get("/api/ordering/sales-stats?weeks=4")
        body = resp.get_json()

        assert resp.status_code == 200
        assert body["weeks"] == 4
        assert body["data"][0]["avgSales"] == 110

    @pytest.mark.integration
    def test_sales_stats_invalid_weeks(self, client):
        assert client.get("/api/ordering/sales-stats?weeks=0").status_code == 400
        assert client.get("/api/ordering/sales-stats?weeks=x").status_code == 400

    @pytest.mark.integration
    def test_recipes_and_ingredients(self, client):
        recipes = client.get("/api/ordering/recipes").get_json()["data"]
        ingredients = client.get("/api/ordering/ingredients").get_json()["data"]

        assert len(recipes) == 3
        assert recipes[1]["lossRate"] == 10
        assert [i["ingredientCode"] for i in ingredients] == ["I001", "I002"]
        assert ingredients[0]["packagingUnit"] == 1000

    @pytest.mark.integration
    def test_inventory_and_in_transit(self, client):
        assert client.get("/api/ordering/inventory").get_json()["data"] == {"I001": 5000.0, "I002": 0.0}
        assert client.get("/api/ordering/in-transit").get_json()["data"] == {"I001": 4000.0, "I002": 1500.0}

    @pytest.mark.integration
    def test_failed_source_returns_empty(self, sample_source, client):
        sample_source.failing = {"bom_lines"}
        body = client.get("/api/ordering/recipes").get_json()
        assert body["success"] is True
        assert body["data"] == []


class TestConfigAPI:

    @pytest.mark.integration
    def test_get_config(self, client):
        data = client.get("/api/ordering/config").get_json()["data"]
        assert data["serviceLevel"] == 95
        assert data["zScore"] == 1.65

    @pytest.mark.integration
    def test_put_config_updates_z_score(self, client):
        resp = client.put("/api/ordering/config", json={"serviceLevel": 99})
        assert resp.status_code == 200
        assert resp.get_json()["data"]["zScore"] == 2.33
        assert client.get("/api/ordering/config").get_json()["data"]["serviceLevel"] == 99

    @pytest.mark.integration
    def test_put_config_invalid(self, client):
        resp = client.put("/api/ordering/config", json={"serviceLevel": 150})
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False

    @pytest.mark.integration
    def test_put_config_unknown_key(self, client):
        assert client.put("/api/ordering/config", json={"storeId": "1"}).status_code == 400

    @pytest.mark.integration
    def test_put_config_requires_object(self, client):
        assert client.put("/api/ordering/config", json=[1, 2]).status_code == 400


class TestSimulateAPI:

    @pytest.mark.integration
    def test_simulate_keeps_stored_config(self, live_client):
        resp = live_client.post("/api/ordering/simulate", json={
            "serviceLevel": 99,
            "additionalDemand": {"I001": 1000},
        })
        body = resp.get_json()

        assert resp.status_code == 200
        assert body["config"]["zScore"] == 2.33
        assert body["data"]["serviceLevel"] == 99
        assert live_client.get("/api/ordering/config").get_json()["data"]["serviceLevel"] == 95

    @pytest.mark.integration
    def test_simulate_additional_demand_raises_order(self, live_client):
        base = live_client.post("/api/ordering/simulate", json={}).get_json()["data"]
        more = live_client.post("/api/ordering/simulate", json={
            "additionalDemand": {"I001": 50000},
        }).get_json()["data"]

        def pork(report):
            return next(i for i in report["items"] if i["ingredientCode"] == "I001")

        assert pork(more)["grossRequirement"] == pork(base)["grossRequirement"] + 50000
        assert pork(more)["orderQty"] > pork(base)["orderQty"]

    @pytest.mark.integration
    def test_simulate_invalid_payload(self, client):
        assert client.post("/api/ordering/simulate", json={"additionalDemand": [1]}).status_code == 400
        assert client.post("/api/ordering/simulate", json={"serviceLevel": 120}).status_code == 400


class TestExportAPI:

    @pytest.mark.integration
    def test_export_excel(self, live_client):
        resp = live_client.get("/api/ordering/export")

        assert resp.status_code == 200
        assert "spreadsheetml" in resp.headers["Content-Type"]
        wb = load_workbook(io.BytesIO(resp.data))
        assert wb.sheetnames == ["발주권고", "요약"]


class TestErrorHandlers:

    @pytest.mark.integration
    def test_not_found_json(self, client):
        resp = client.get("/api/ordering/nope")
        assert resp.status_code == 404
        assert resp.get_json()["code"] == "NOT_FOUND"

    @pytest.mark.integration
    def test_method_not_allowed_json(self, client):
        resp = client.delete("/api/ordering/config")
        assert resp.status_code == 405
        assert resp.get_json()["success"] is False

    @pytest.mark.integration
    def test_unexpected_error_logged_with_traceback(self, ordering_service, client, monkeypatch):
        mock_logger = MagicMock()
        monkeypatch.setattr("src.web.routes.api_ordering.logger", mock_logger)

        def broken(*args, **kwargs):
            raise RuntimeError("계산 오류")

        monkeypatch.setattr(ordering_service, "generate_recommendation", broken)
        resp = client.get("/api/ordering/recommendation")

        assert resp.status_code == 500
        assert resp.get_json()["success"] is False
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["exc_info"] is True
