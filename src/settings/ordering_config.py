"""
OrderingConfig -- 통계적 발주 설정 값 객체

서비스 수준, Z-Score, 예측 기간, 기본 리드타임/안전재고 일수를 담습니다.
frozen dataclass이므로 실행 중 변경되지 않으며, 설정 변경은 새 값을 만듭니다.

Usage:
    config = OrderingConfig.from_env()
    strict = config.updated(service_level=99)   # z_score 자동 2.33
"""

import os
from dataclasses import dataclass, asdict, replace
from typing import Any, Dict

from src.domain.ordering.safety_stock import z_score_for
from src.settings.app_config import MEAL_PLAN_SPREADSHEET_ID
from src.settings.constants import (
    DEFAULT_FORECAST_WEEKS,
    DEFAULT_LEAD_TIME,
    DEFAULT_SAFETY_DAYS,
    DEFAULT_SERVICE_LEVEL,
    DEFAULT_Z_SCORE,
)

# API(camelCase) ↔ 필드명
_CAMEL_TO_FIELD = {
    "serviceLevel": "service_level",
    "zScore": "z_score",
    "forecastWeeks": "forecast_weeks",
    "defaultLeadTime": "default_lead_time",
    "safetyDays": "safety_days",
    "mealPlanSpreadsheetId": "meal_plan_spreadsheet_id",
}
_FIELD_TO_CAMEL = {v: k for k, v in _CAMEL_TO_FIELD.items()}


@dataclass(frozen=True)
class OrderingConfig:
    """발주 설정 (불변 값 객체)"""
    service_level: float = DEFAULT_SERVICE_LEVEL
    z_score: float = DEFAULT_Z_SCORE
    forecast_weeks: int = DEFAULT_FORECAST_WEEKS
    default_lead_time: int = DEFAULT_LEAD_TIME
    safety_days: int = DEFAULT_SAFETY_DAYS
    meal_plan_spreadsheet_id: str = MEAL_PLAN_SPREADSHEET_ID

    def __post_init__(self):
        if not 0 < self.service_level < 100:
            raise ValueError(f"서비스 수준은 0~100 사이여야 합니다: {self.service_level}")
        if self.z_score < 0:
            raise ValueError(f"Z-Score는 음수일 수 없습니다: {self.z_score}")
        if self.forecast_weeks < 1:
            raise ValueError(f"예측 기간은 1주 이상이어야 합니다: {self.forecast_weeks}")
        if self.default_lead_time < 0:
            raise ValueError(f"리드타임은 음수일 수 없습니다: {self.default_lead_time}")
        if self.safety_days < 0:
            raise ValueError(f"안전재고 일수는 음수일 수 없습니다: {self.safety_days}")

    @classmethod
    def default(cls) -> "OrderingConfig":
        return cls()

    @classmethod
    def from_env(cls) -> "OrderingConfig":
        """환경변수(ORDERING_*)에서 설정 로드, 없으면 기본값"""
        service_level = float(os.getenv("ORDERING_SERVICE_LEVEL", DEFAULT_SERVICE_LEVEL))
        return cls(
            service_level=service_level,
            z_score=z_score_for(service_level),
            forecast_weeks=int(os.getenv("ORDERING_FORECAST_WEEKS", DEFAULT_FORECAST_WEEKS)),
            default_lead_time=int(os.getenv("ORDERING_DEFAULT_LEAD_TIME", DEFAULT_LEAD_TIME)),
            safety_days=int(os.getenv("ORDERING_SAFETY_DAYS", DEFAULT_SAFETY_DAYS)),
            meal_plan_spreadsheet_id=os.getenv("MEAL_PLAN_SPREADSHEET_ID", MEAL_PLAN_SPREADSHEET_ID),
        )

    def updated(self, **changes: Any) -> "OrderingConfig":
        """변경 사항을 반영한 새 설정 반환

        service_level이 바뀌면 z_score도 함께 다시 계산한다 (z_score를 직접 주면 그 값 사용).
        """
        unknown = set(changes) - set(_FIELD_TO_CAMEL)
        if unknown:
            raise ValueError(f"알 수 없는 설정 항목: {sorted(unknown)}")

        changes = {k: v for k, v in changes.items() if v is not None}
        if "service_level" in changes:
            changes["service_level"] = float(changes["service_level"])
            if "z_score" not in changes:
                changes["z_score"] = z_score_for(changes["service_level"])
        for key in ("forecast_weeks", "default_lead_time", "safety_days"):
            if key in changes:
                changes[key] = int(changes[key])
        if "z_score" in changes:
            changes["z_score"] = float(changes["z_score"])
        return replace(self, **changes)

    def updated_from_dict(self, data: Dict[str, Any]) -> "OrderingConfig":
        """camelCase 딕셔너리(API 요청 본문)로 갱신"""
        changes = {}
        for key, value in (data or {}).items():
            field_name = _CAMEL_TO_FIELD.get(key, key)
            changes[field_name] = value
        return self.updated(**changes)

    def to_dict(self) -> Dict[str, Any]:
        return {_FIELD_TO_CAMEL[k]: v for k, v in asdict(self).items()}
