"""
CompositeOrderingSource -- 시트(식단/실적/레시피/마스터) + ERP(재고/미입고)

재고와 미입고는 ERP DB에서, 나머지는 워크북에서 조회합니다.
"""

from datetime import date
from typing import Dict, List, Optional

from src.domain.models import BOMLine, IngredientMaster, MealPlanEntry, SalesHistoryRecord
from src.infrastructure.base_source import OrderingDataSource
from src.infrastructure.database.repos import ErpInventoryRepository


class CompositeOrderingSource(OrderingDataSource):
    """시트 + ERP 조합 소스"""

    def __init__(self, sheet_source: OrderingDataSource, erp_repo: ErpInventoryRepository):
        self.sheet_source = sheet_source
        self.erp_repo = erp_repo

    def fetch_meal_plan(self, start_date: str, end_date: str) -> List[MealPlanEntry]:
        return self.sheet_source.fetch_meal_plan(start_date, end_date)

    def fetch_sales_history(self, weeks: int = 4, today: Optional[date] = None) -> List[SalesHistoryRecord]:
        return self.sheet_source.fetch_sales_history(weeks, today=today)

    def fetch_bom_lines(self) -> List[BOMLine]:
        return self.sheet_source.fetch_bom_lines()

    def fetch_ingredient_master(self, config=None) -> List[IngredientMaster]:
        return self.sheet_source.fetch_ingredient_master(config)

    def fetch_current_inventory(self) -> Dict[str, float]:
        return self.erp_repo.get_current_inventory()

    def fetch_in_transit_orders(self) -> Dict[str, float]:
        return self.erp_repo.get_in_transit()
