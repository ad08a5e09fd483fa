"""
도메인 값 객체 (Value Objects)

발주 계산에서 사용하는 데이터 구조를 정의합니다.
I/O 의존성 없이 순수 데이터 구조만 포함합니다.

모든 값 객체는 frozen dataclass이며, to_dict()는 API/엑셀 출력에 쓰는
camelCase 필드명으로 변환합니다.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_camel_dict(obj: Any) -> Dict[str, Any]:
    result = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if isinstance(value, tuple):
            value = list(value)
        result[_camel(f.name)] = value
    return result


@dataclass(frozen=True)
class MealPlanEntry:
    """식단 계획 (미래 배식 슬롯)"""
    date: str
    weekday: str
    meal_type: str = "중식"
    corner: str = "A코너"
    menu_code: str = ""
    menu_name: str = ""
    planned_qty: Optional[float] = None

    @property
    def menu_key(self) -> str:
        return self.menu_code or self.menu_name

    def to_dict(self) -> Dict[str, Any]:
        return _to_camel_dict(self)


@dataclass(frozen=True)
class SalesHistoryRecord:
    """판매 실적 1건"""
    date: str
    weekday: str
    menu_code: str = ""
    menu_name: str = ""
    corner: str = "A코너"
    sold_qty: float = 0

    @property
    def menu_key(self) -> str:
        return self.menu_code or self.menu_name

    def to_dict(self) -> Dict[str, Any]:
        return _to_camel_dict(self)


@dataclass(frozen=True)
class DayOfWeekStatistic:
    """메뉴 × 요일 판매 통계"""
    weekday: str
    menu_code: str
    menu_name: str
    avg_sales: float
    std_dev: float
    max_sales: float
    min_sales: float
    sample_count: int

    def to_dict(self) -> Dict[str, Any]:
        return _to_camel_dict(self)


@dataclass(frozen=True)
class BOMLine:
    """레시피(BOM) 1줄: 메뉴 1단위당 식자재 소요량"""
    menu_code: str
    menu_name: str
    ingredient_code: str
    ingredient_name: str
    required_qty: float
    unit: str = "g"
    loss_rate: float = 0.0      # % (5 = 5%)

    @property
    def ingredient_key(self) -> str:
        return self.ingredient_code or self.ingredient_name

    def matches_menu(self, menu_key: str) -> bool:
        return self.menu_code == menu_key or self.menu_name == menu_key

    def to_dict(self) -> Dict[str, Any]:
        return _to_camel_dict(self)


@dataclass(frozen=True)
class IngredientMaster:
    """식자재 마스터"""
    ingredient_code: str
    ingredient_name: str
    category: str = "기타"
    unit: str = "g"
    moq: float = 1
    packaging_unit: float = 1
    lead_time: int = 2
    safety_days: int = 1
    unit_price: float = 0
    supplier_code: Optional[str] = None
    supplier_name: str = ""

    @property
    def ingredient_key(self) -> str:
        return self.ingredient_code or self.ingredient_name

    def to_dict(self) -> Dict[str, Any]:
        return _to_camel_dict(self)


@dataclass(frozen=True)
class MenuDemand:
    """메뉴별 예상 수요 (기간 합계)"""
    qty: float = 0.0
    std_dev: float = 0.0


@dataclass(frozen=True)
class IngredientRequirement:
    """BOM 전개 결과: 식자재별 총소요량과 수요 표준편차"""
    ingredient_key: str
    gross_qty: float
    std_dev: float
    contributing_menus: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OrderCalculationLine:
    """식자재 1건의 발주 계산 결과"""
    ingredient_code: str
    ingredient_name: str
    category: str
    unit: str
    gross_requirement: int
    safety_stock: int
    total_requirement: int
    current_stock: int
    in_transit: int
    available_stock: int
    net_requirement: int
    order_qty: float
    lead_time: int
    moq: float
    unit_price: float
    estimated_cost: int
    avg_daily_sales: int
    std_dev: int
    service_level: float
    days_of_stock: float
    status: str
    status_message: str = ""
    packaging_unit: float = 1
    supplier_name: str = ""
    contributing_menus: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return _to_camel_dict(self)


@dataclass(frozen=True)
class OrderRecommendation:
    """발주 권고 리포트 (발주 계산 1회의 최종 산출물)"""
    order_date: str
    delivery_date: str
    target_period_start: str
    target_period_end: str
    items: Tuple[OrderCalculationLine, ...]
    total_items: int
    urgent_items: int
    shortage_items: int
    total_estimated_cost: int
    service_level: float
    forecast_weeks: int
    lead_time_days: int
    source_errors: Tuple[str, ...] = ()     # 조회 실패한 입력 소스
    inputs_empty: bool = False               # 6개 입력이 모두 비었음

    def to_dict(self) -> Dict[str, Any]:
        result = _to_camel_dict(self)
        result["items"] = [item.to_dict() for item in self.items]
        return result


@dataclass(frozen=True)
class PlanningInputs:
    """발주 계산 1회분 입력 데이터 (6개 소스)"""
    meal_plan: Tuple[MealPlanEntry, ...] = ()
    sales_history: Tuple[SalesHistoryRecord, ...] = ()
    bom_lines: Tuple[BOMLine, ...] = ()
    ingredients: Tuple[IngredientMaster, ...] = ()
    current_inventory: Dict[str, float] = field(default_factory=dict)
    in_transit: Dict[str, float] = field(default_factory=dict)
    source_errors: Tuple[str, ...] = ()

    def is_empty(self) -> bool:
        """6개 입력이 모두 비었는지 (데이터 파이프라인 이상 판별용)"""
        return not (
            self.meal_plan or self.sales_history or self.bom_lines
            or self.ingredients or self.current_inventory or self.in_transit
        )

    def summary(self) -> Dict[str, Any]:
        return {
            "mealPlan": len(self.meal_plan),
            "salesHistory": len(self.sales_history),
            "bomLines": len(self.bom_lines),
            "ingredients": len(self.ingredients),
            "inventory": len(self.current_inventory),
            "inTransit": len(self.in_transit),
            "sourceErrors": list(self.source_errors),
        }


def as_list(records) -> List[Dict[str, Any]]:
    """값 객체 시퀀스 → camelCase 딕셔너리 리스트"""
    return [r.to_dict() for r in records]
