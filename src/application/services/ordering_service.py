"""
StatisticalOrderingService -- 통계적 발주 권고 서비스

6개 입력(식단, 판매실적, 레시피, 식자재 마스터, 현재고, 미입고)을 병렬로
조회한 뒤 도메인 파이프라인(plan_orders)을 실행합니다.

- 조회 실패는 빈 데이터로 대체하고 경고 로그를 남깁니다 (리포트 전체를 중단하지 않음).
- 설정은 불변 값이며, 변경 시 참조만 교체합니다. 실행마다 설정 스냅샷 1개를 사용합니다.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from src.domain.models import DayOfWeekStatistic, OrderRecommendation, PlanningInputs
from src.domain.ordering.demand_forecaster import calculate_day_of_week_stats
from src.domain.ordering.planner import apply_additional_demand, plan_orders
from src.infrastructure.base_source import OrderingDataSource
from src.settings.constants import PLANNING_HORIZON_DAYS
from src.settings.ordering_config import OrderingConfig
from src.utils.date_utils import add_days, format_date
from src.utils.logger import get_logger, log_with_context

logger = get_logger(__name__)

# (입력명, 실패 시 기본값 팩토리)
_INPUT_DEFAULTS: Dict[str, Callable[[], Any]] = {
    "meal_plan": tuple,
    "sales_history": tuple,
    "bom_lines": tuple,
    "ingredients": tuple,
    "current_inventory": dict,
    "in_transit": dict,
}


class StatisticalOrderingService:
    """통계적 발주 서비스

    Usage:
        service = StatisticalOrderingService(source=build_default_source())
        recommendation = service.generate_recommendation()
        service.update_config({"serviceLevel": 99})
    """

    def __init__(
        self,
        source: OrderingDataSource,
        config: Optional[OrderingConfig] = None,
        max_workers: int = len(_INPUT_DEFAULTS),
    ):
        """초기화

        Args:
            source: 입력 데이터 소스
            config: 발주 설정 (None이면 환경변수/기본값)
            max_workers: 병렬 조회 워커 수
        """
        self.source = source
        self.max_workers = max_workers
        self._config = config or OrderingConfig.from_env()
        self._config_lock = threading.Lock()

    # ----------------------------------------
    # 설정
    # ----------------------------------------

    def get_config(self) -> OrderingConfig:
        with self._config_lock:
            return self._config

    def update_config(self, changes: Mapping[str, Any]) -> OrderingConfig:
        """설정 변경 (camelCase 키). 서비스 수준 변경 시 Z-Score도 갱신된다.

        Raises:
            ValueError: 잘못된 설정 값
        """
        with self._config_lock:
            self._config = self._config.updated_from_dict(dict(changes))
            config = self._config
        logger.info(f"[발주설정] 변경: {config.to_dict()}")
        return config

    # ----------------------------------------
    # 데이터 조회
    # ----------------------------------------

    @staticmethod
    def target_period(config: OrderingConfig, today: date) -> Tuple[str, str]:
        """발주 대상 기간 (D+리드타임 ~ D+리드타임+7)"""
        start = add_days(today, config.default_lead_time)
        end = add_days(start, PLANNING_HORIZON_DAYS)
        return format_date(start), format_date(end)

    def _safe_fetch(self, name: str, fetch: Callable[[], Any]) -> Tuple[Any, bool]:
        """조회 실행. 실패 시 (빈 값, False)"""
        try:
            return fetch(), True
        except Exception as e:
            log_with_context(logger, "warning", "입력 데이터 조회 실패 → 빈 데이터로 대체",
                             source=name, error=e)
            return _INPUT_DEFAULTS[name](), False

    def fetch_inputs(self, config: OrderingConfig, today: date) -> PlanningInputs:
        """6개 입력 병렬 조회 (모두 완료될 때까지 대기)"""
        start, end = self.target_period(config, today)
        fetchers: Dict[str, Callable[[], Any]] = {
            "meal_plan": lambda: self.source.fetch_meal_plan(start, end),
            "sales_history": lambda: self.source.fetch_sales_history(config.forecast_weeks, today=today),
            "bom_lines": self.source.fetch_bom_lines,
            "ingredients": lambda: self.source.fetch_ingredient_master(config),
            "current_inventory": self.source.fetch_current_inventory,
            "in_transit": self.source.fetch_in_transit_orders,
        }

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                name: executor.submit(self._safe_fetch, name, fetch)
                for name, fetch in fetchers.items()
            }
            results = {name: future.result() for name, future in futures.items()}

        errors = tuple(name for name, (_, ok) in results.items() if not ok)
        inputs = PlanningInputs(
            meal_plan=tuple(results["meal_plan"][0]),
            sales_history=tuple(results["sales_history"][0]),
            bom_lines=tuple(results["bom_lines"][0]),
            ingredients=tuple(results["ingredients"][0]),
            current_inventory=dict(results["current_inventory"][0]),
            in_transit=dict(results["in_transit"][0]),
            source_errors=errors,
        )

        if inputs.is_empty():
            logger.warning("[발주] 6개 입력 데이터가 모두 비어 있음 - 데이터 소스 확인 필요")
        return inputs

    def fetch_meal_plan(self, start_date: str, end_date: str) -> list:
        return list(self._safe_fetch("meal_plan", lambda: self.source.fetch_meal_plan(start_date, end_date))[0])

    def fetch_sales_history(self, weeks: int, today: Optional[date] = None) -> list:
        today = today or date.today()
        return list(self._safe_fetch(
            "sales_history", lambda: self.source.fetch_sales_history(weeks, today=today))[0])

    def fetch_bom_lines(self) -> list:
        return list(self._safe_fetch("bom_lines", self.source.fetch_bom_lines)[0])

    def fetch_ingredient_master(self) -> list:
        config = self.get_config()
        return list(self._safe_fetch("ingredients", lambda: self.source.fetch_ingredient_master(config))[0])

    def fetch_current_inventory(self) -> Dict[str, float]:
        return dict(self._safe_fetch("current_inventory", self.source.fetch_current_inventory)[0])

    def fetch_in_transit_orders(self) -> Dict[str, float]:
        return dict(self._safe_fetch("in_transit", self.source.fetch_in_transit_orders)[0])

    # ----------------------------------------
    # 발주 권고
    # ----------------------------------------

    def calculate_sales_stats(self, weeks: Optional[int] = None, today: Optional[date] = None) -> List[DayOfWeekStatistic]:
        """최근 N주 요일별 판매 통계"""
        weeks = weeks or self.get_config().forecast_weeks
        history = self.fetch_sales_history(weeks, today=today)
        return list(calculate_day_of_week_stats(history).values())

    def generate_recommendation(
        self,
        config: Optional[OrderingConfig] = None,
        today: Optional[date] = None,
    ) -> OrderRecommendation:
        """발주 권고 생성 (조회 → 계산)"""
        config = config or self.get_config()
        today = today or date.today()

        logger.info("[발주] ===== 발주 권고 생성 시작 =====")
        inputs = self.fetch_inputs(config, today)
        recommendation = plan_orders(inputs, config, today=today)
        logger.info("[발주] ===== 발주 권고 생성 완료 =====")
        return recommendation

    def simulate(
        self,
        service_level: Optional[float] = None,
        forecast_weeks: Optional[int] = None,
        additional_demand: Optional[Mapping[str, float]] = None,
        today: Optional[date] = None,
    ) -> Tuple[OrderRecommendation, OrderingConfig]:
        """what-if 시뮬레이션 (공유 설정은 바꾸지 않음)

        Returns:
            (권고, 시뮬레이션에 사용한 설정)
        """
        config = self.get_config().updated(
            service_level=service_level or None,
            forecast_weeks=forecast_weeks or None,
        )
        today = today or date.today()

        recommendation = self.generate_recommendation(config=config, today=today)
        if additional_demand:
            recommendation = apply_additional_demand(recommendation, additional_demand, config, today=today)
        return recommendation, config


def build_default_source(workbook_path=None, erp_db_path=None) -> OrderingDataSource:
    """.env 설정 기반 데이터 소스

    ERP DB 파일이 있으면 재고/미입고는 ERP에서, 없으면 워크북 시트에서 조회한다.
    """
    from src.infrastructure.composite_source import CompositeOrderingSource
    from src.infrastructure.database.repos import ErpInventoryRepository
    from src.infrastructure.sheets import SheetOrderingSource, WorkbookReader
    from src.settings.app_config import ERP_DB_PATH, WORKBOOK_PATH

    sheet_source = SheetOrderingSource(WorkbookReader(workbook_path or WORKBOOK_PATH))
    erp_db_path = Path(erp_db_path) if erp_db_path else ERP_DB_PATH
    if erp_db_path.exists():
        return CompositeOrderingSource(sheet_source, ErpInventoryRepository(db_path=erp_db_path))
    return sheet_source
