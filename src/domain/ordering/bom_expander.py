"""
BomExpander -- 메뉴 수요 → 식자재 소요량 (BOM 1단계 전개)

1. 식단 계획 × 요일별 통계 → 메뉴별 예상 수요
   - 일별 수요는 서로 독립으로 보고 표준편차를 제곱합의 제곱근으로 합산
2. 메뉴별 수요 × 레시피 소요량 × (1 + 로스율) → 식자재별 총소요량
   - 소요량(상수)을 곱한 표준편차는 선형으로 스케일
   - 여러 메뉴에서 오는 식자재 표준편차는 제곱합의 제곱근으로 합산
"""

import math
from typing import Dict, Iterable, Mapping

from src.domain.models import (
    BOMLine,
    DayOfWeekStatistic,
    IngredientRequirement,
    MealPlanEntry,
    MenuDemand,
)
from src.domain.ordering.demand_forecaster import StatKey, stat_key
from src.settings.constants import FALLBACK_FORECAST_QTY, FALLBACK_STD_DEV
from src.utils.logger import get_logger

logger = get_logger(__name__)


def combine_std_dev(a: float, b: float) -> float:
    """독립 표준편차 합산: √(a² + b²)"""
    return math.sqrt(a ** 2 + b ** 2)


def forecast_menu_demand(
    meal_plan: Iterable[MealPlanEntry],
    stats: Mapping[StatKey, DayOfWeekStatistic],
) -> Dict[str, MenuDemand]:
    """식단 계획 → 메뉴별 예상 수요

    통계가 있으면 (평균, 표준편차), 없으면 (계획수량 또는 100, 20)을 사용한다.

    Args:
        meal_plan: 대상 기간 식단
        stats: calculate_day_of_week_stats() 결과

    Returns:
        {menu_key: MenuDemand}
    """
    demand: Dict[str, MenuDemand] = {}
    fallback_count = 0

    for entry in meal_plan:
        stat = stats.get(stat_key(entry.menu_key, entry.weekday))
        if stat is not None:
            qty, std_dev = stat.avg_sales, stat.std_dev
        else:
            qty = entry.planned_qty or FALLBACK_FORECAST_QTY
            std_dev = FALLBACK_STD_DEV
            fallback_count += 1

        existing = demand.get(entry.menu_key, MenuDemand())
        demand[entry.menu_key] = MenuDemand(
            qty=existing.qty + qty,
            std_dev=combine_std_dev(existing.std_dev, std_dev),
        )

    logger.info(
        f"[BOM전개] 메뉴 수요 {len(demand)}건 (통계 없음 기본값 적용 {fallback_count}건)"
    )
    return demand


def explode_bom(
    menu_demand: Mapping[str, MenuDemand],
    bom_lines: Iterable[BOMLine],
) -> Dict[str, IngredientRequirement]:
    """메뉴별 수요 → 식자재별 총소요량/표준편차

    식단에 없는 메뉴의 레시피는 결과에 기여하지 않는다.

    Args:
        menu_demand: forecast_menu_demand() 결과
        bom_lines: 레시피 목록

    Returns:
        {ingredient_key: IngredientRequirement} (첫 등장 순서)
    """
    bom_lines = list(bom_lines)
    requirements: Dict[str, IngredientRequirement] = {}

    for menu_key, demand in menu_demand.items():
        for line in bom_lines:
            if not line.matches_menu(menu_key):
                continue

            required_qty = demand.qty * line.required_qty * (1 + (line.loss_rate or 0) / 100)
            required_std_dev = demand.std_dev * line.required_qty

            key = line.ingredient_key
            existing = requirements.get(key)
            if existing is None:
                requirements[key] = IngredientRequirement(
                    ingredient_key=key,
                    gross_qty=required_qty,
                    std_dev=required_std_dev,
                    contributing_menus=(menu_key,),
                )
            else:
                requirements[key] = IngredientRequirement(
                    ingredient_key=key,
                    gross_qty=existing.gross_qty + required_qty,
                    std_dev=combine_std_dev(existing.std_dev, required_std_dev),
                    contributing_menus=existing.contributing_menus + (menu_key,),
                )

    logger.info(f"[BOM전개] 식자재 소요량 {len(requirements)}건 산출")
    return requirements
