"""OrderingConfig 테스트"""

from dataclasses import FrozenInstanceError

import pytest

from src.settings.ordering_config import OrderingConfig


class TestOrderingConfig:

    @pytest.mark.unit
    def test_defaults(self):
        config = OrderingConfig.default()
        assert config.service_level == 95
        assert config.z_score == 1.65
        assert config.forecast_weeks == 4
        assert config.default_lead_time == 2
        assert config.safety_days == 1

    @pytest.mark.unit
    def test_frozen(self, config):
        with pytest.raises(FrozenInstanceError):
            config.service_level = 99

    @pytest.mark.unit
    def test_updated_recomputes_z_score(self, config):
        strict = config.updated(service_level=99)
        assert strict.z_score == 2.33
        assert config.z_score == 1.65       # 원본 유지

    @pytest.mark.unit
    def test_explicit_z_score_kept_with_service_level(self, config):
        """z_score를 직접 주면 서비스 수준으로 다시 계산하지 않는다"""
        updated = config.updated_from_dict({"serviceLevel": 97, "zScore": 2.0})
        assert updated.service_level == 97
        assert updated.z_score == 2.0

    @pytest.mark.unit
    def test_unknown_service_level_uses_default_z(self, config):
        assert config.updated(service_level=93).z_score == 1.65

    @pytest.mark.unit
    def test_none_values_ignored(self, config):
        assert config.updated(service_level=None, forecast_weeks=None) == config

    @pytest.mark.unit
    @pytest.mark.parametrize("changes", [
        {"service_level": 0},
        {"service_level": 100},
        {"forecast_weeks": 0},
        {"default_lead_time": -1},
        {"safety_days": -1},
    ])
    def test_invalid_values_rejected(self, config, changes):
        with pytest.raises(ValueError):
            config.updated(**changes)

    @pytest.mark.unit
    def test_unknown_key_rejected(self, config):
        with pytest.raises(ValueError):
            config.updated(warehouse="MAIN")

    @pytest.mark.unit
    def test_camel_case_round_trip(self, config):
        updated = config.updated_from_dict({"serviceLevel": 97, "forecastWeeks": "6"})
        assert updated.service_level == 97
        assert updated.z_score == 1.88
        assert updated.forecast_weeks == 6

        data = updated.to_dict()
        assert data["serviceLevel"] == 97
        assert data["zScore"] == 1.88
        assert data["forecastWeeks"] == 6
        assert "defaultLeadTime" in data
        assert "mealPlanSpreadsheetId" in data

    @pytest.mark.unit
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ORDERING_SERVICE_LEVEL", "90")
        monkeypatch.setenv("ORDERING_FORECAST_WEEKS", "8")
        monkeypatch.setenv("ORDERING_DEFAULT_LEAD_TIME", "3")
        monkeypatch.setenv("ORDERING_SAFETY_DAYS", "2")

        config = OrderingConfig.from_env()

        assert config.service_level == 90
        assert config.z_score == 1.28
        assert config.forecast_weeks == 8
        assert config.default_lead_time == 3
        assert config.safety_days == 2
