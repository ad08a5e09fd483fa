"""
OrderingDataSource -- 발주 입력 데이터 소스 인터페이스

6개 조회는 서로 독립이며, OrderingService가 병렬로 호출합니다.
각 조회는 불변 스냅샷(리스트/딕셔너리)을 반환합니다.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Optional

from src.domain.models import BOMLine, IngredientMaster, MealPlanEntry, SalesHistoryRecord


class OrderingDataSource(ABC):
    """발주 입력 데이터 소스 추상 인터페이스"""

    @abstractmethod
    def fetch_meal_plan(self, start_date: str, end_date: str) -> List[MealPlanEntry]:
        """[start_date, end_date] 식단 계획 (YYYY-MM-DD)"""

    @abstractmethod
    def fetch_sales_history(self, weeks: int = 4, today: Optional[date] = None) -> List[SalesHistoryRecord]:
        """최근 N주 판매 실적"""

    @abstractmethod
    def fetch_bom_lines(self) -> List[BOMLine]:
        """레시피(BOM)"""

    @abstractmethod
    def fetch_ingredient_master(self, config=None) -> List[IngredientMaster]:
        """식자재 마스터"""

    @abstractmethod
    def fetch_current_inventory(self) -> Dict[str, float]:
        """{식자재코드: 현재고}"""

    @abstractmethod
    def fetch_in_transit_orders(self) -> Dict[str, float]:
        """{식자재코드: 미입고 수량}"""
