"""
OrderPlanner -- 통계적 발주 계산 파이프라인 (순수 로직)

    판매통계 → 메뉴수요 → BOM 전개 → 안전재고 → 순소요량/발주량 →
    상태 판정 → 정렬 → 요약

I/O 없이 입력(PlanningInputs)과 설정(OrderingConfig)만으로 계산한다.
같은 입력/설정/기준일이면 항상 같은 결과를 낸다. 입력 컬렉션은 변경하지 않는다.

Usage:
    from src.domain.ordering.planner import plan_orders

    recommendation = plan_orders(inputs, config, today=date.today())
"""

from dataclasses import replace
from datetime import date, datetime
from typing import List, Mapping, Optional, Tuple

from src.domain.models import (
    IngredientMaster,
    IngredientRequirement,
    OrderCalculationLine,
    OrderRecommendation,
    PlanningInputs,
)
from src.domain.ordering.bom_expander import explode_bom, forecast_menu_demand
from src.domain.ordering.demand_forecaster import calculate_day_of_week_stats
from src.domain.ordering.net_requirement import (
    NetRequirement,
    build_master_index,
    resolve_master,
    resolve_net_requirement,
    round_to_packaging,
)
from src.domain.ordering.rounding import round_half_up, to_int, to_quantity
from src.domain.ordering.safety_stock import calculate_safety_stock
from src.domain.ordering.status_classifier import (
    StockPosition,
    classify_status,
    days_of_stock,
    sort_by_status,
)
from src.settings.constants import (
    PLANNING_HORIZON_DAYS,
    STATUS_SHORTAGE,
    STATUS_URGENT,
)
from src.utils.date_utils import add_days, format_date
from src.utils.logger import get_logger

logger = get_logger(__name__)


def build_order_line(
    requirement: IngredientRequirement,
    master: IngredientMaster,
    net: NetRequirement,
    service_level: float,
) -> OrderCalculationLine:
    """계산 결과 → 출력 행 (정수 반올림은 여기서만)"""
    days = days_of_stock(net.available_stock, net.gross_qty, PLANNING_HORIZON_DAYS)
    status = classify_status(StockPosition(
        days_of_stock=days,
        lead_time=master.lead_time,
        net_requirement=net.net_requirement,
        available_stock=net.available_stock,
        total_requirement=net.total_requirement,
    ))

    return OrderCalculationLine(
        ingredient_code=master.ingredient_code,
        ingredient_name=master.ingredient_name,
        category=master.category,
        unit=master.unit,
        gross_requirement=to_int(net.gross_qty),
        safety_stock=to_int(net.safety_stock),
        total_requirement=to_int(net.total_requirement),
        current_stock=to_int(net.current_stock),
        in_transit=to_int(net.in_transit),
        available_stock=to_int(net.available_stock),
        net_requirement=to_int(net.net_requirement),
        order_qty=to_quantity(net.order_qty),
        lead_time=master.lead_time,
        moq=master.moq,
        unit_price=master.unit_price,
        estimated_cost=to_int(net.estimated_cost),
        avg_daily_sales=to_int(net.gross_qty / PLANNING_HORIZON_DAYS),
        std_dev=to_int(requirement.std_dev),
        service_level=service_level,
        days_of_stock=round_half_up(days, 1),
        status=status.status,
        status_message=status.message,
        packaging_unit=master.packaging_unit,
        supplier_name=master.supplier_name or "",
        contributing_menus=requirement.contributing_menus,
    )


def calculate_order_lines(
    requirements: Mapping[str, IngredientRequirement],
    inputs: PlanningInputs,
    config,
) -> List[OrderCalculationLine]:
    """식자재별 안전재고 → 순소요량 → 발주량 → 상태"""
    master_index = build_master_index(inputs.ingredients)
    missing_masters = 0
    lines = []

    for key, requirement in requirements.items():
        if key not in master_index:
            missing_masters += 1
        master = resolve_master(key, master_index, config)

        safety_stock = calculate_safety_stock(
            requirement.std_dev, master.lead_time, master.safety_days, config.z_score,
        )
        net = resolve_net_requirement(
            requirement.gross_qty,
            safety_stock,
            master,
            on_hand=inputs.current_inventory.get(key, 0.0),
            in_transit=inputs.in_transit.get(key, 0.0),
        )
        lines.append(build_order_line(requirement, master, net, config.service_level))

    if missing_masters:
        logger.warning(f"[발주계산] 식자재 마스터 누락 {missing_masters}건 → 기본값 적용")
    return lines


def assemble_recommendation(
    lines: List[OrderCalculationLine],
    config,
    today: date,
    source_errors: Tuple[str, ...] = (),
    inputs_empty: bool = False,
) -> OrderRecommendation:
    """정렬 + 요약 통계 + 대상 기간

    source_errors/inputs_empty는 "발주 불필요"와 "입력 데이터 이상"을
    호출자가 구분할 수 있도록 그대로 싣는다.
    """
    if isinstance(today, datetime):
        today = today.date()

    items = tuple(sort_by_status(lines))
    target_start = add_days(today, config.default_lead_time)
    target_end = add_days(target_start, PLANNING_HORIZON_DAYS)

    urgent_items = sum(1 for i in items if i.status in (STATUS_URGENT, STATUS_SHORTAGE))
    shortage_items = sum(1 for i in items if i.status == STATUS_SHORTAGE)

    return OrderRecommendation(
        order_date=format_date(today),
        delivery_date=format_date(target_start),
        target_period_start=format_date(target_start),
        target_period_end=format_date(target_end),
        items=items,
        total_items=len(items),
        urgent_items=urgent_items,
        shortage_items=shortage_items,
        total_estimated_cost=sum(i.estimated_cost for i in items),
        service_level=config.service_level,
        forecast_weeks=config.forecast_weeks,
        lead_time_days=config.default_lead_time,
        source_errors=tuple(source_errors),
        inputs_empty=inputs_empty,
    )


def plan_orders(
    inputs: PlanningInputs,
    config,
    today: Optional[date] = None,
) -> OrderRecommendation:
    """발주 권고 생성 (전체 파이프라인)

    Args:
        inputs: 6개 입력 데이터
        config: OrderingConfig
        today: 기준일 (기본: 오늘)

    Returns:
        OrderRecommendation
    """
    today = today or date.today()
    logger.info(
        f"[발주계산] 시작: 식단 {len(inputs.meal_plan)}건, 실적 {len(inputs.sales_history)}건,"
        f" 레시피 {len(inputs.bom_lines)}건, 마스터 {len(inputs.ingredients)}건,"
        f" service_level={config.service_level}, z={config.z_score}"
    )

    stats = calculate_day_of_week_stats(inputs.sales_history)
    menu_demand = forecast_menu_demand(inputs.meal_plan, stats)
    requirements = explode_bom(menu_demand, inputs.bom_lines)
    lines = calculate_order_lines(requirements, inputs, config)
    recommendation = assemble_recommendation(
        lines, config, today,
        source_errors=inputs.source_errors,
        inputs_empty=inputs.is_empty(),
    )

    logger.info(
        f"[발주계산] 발주 권고 {recommendation.total_items}건 생성"
        f" (긴급: {recommendation.urgent_items}, 부족: {recommendation.shortage_items},"
        f" 예상금액: {recommendation.total_estimated_cost:,})"
    )
    return recommendation


def apply_additional_demand(
    recommendation: OrderRecommendation,
    additional_demand: Mapping[str, float],
    config,
    today: Optional[date] = None,
) -> OrderRecommendation:
    """추가 수요 반영 (what-if 시뮬레이션)

    추가 수요가 있는 식자재의 총수요/총소요량을 늘리고 순소요량, 발주량
    (MOQ + 포장단위), 금액, 상태를 다시 계산한 새 권고를 반환한다.
    """
    if not additional_demand:
        return recommendation

    lines = []
    for item in recommendation.items:
        extra = float(additional_demand.get(item.ingredient_code, 0) or 0)
        if extra <= 0:
            lines.append(item)
            continue

        gross = item.gross_requirement + extra
        total = item.total_requirement + extra
        net = max(0.0, total - item.available_stock)
        order_qty = round_to_packaging(net, item.moq, item.packaging_unit)
        days = days_of_stock(item.available_stock, gross, PLANNING_HORIZON_DAYS)
        status = classify_status(StockPosition(
            days_of_stock=days,
            lead_time=item.lead_time,
            net_requirement=net,
            available_stock=item.available_stock,
            total_requirement=total,
        ))
        lines.append(replace(
            item,
            gross_requirement=to_int(gross),
            total_requirement=to_int(total),
            net_requirement=to_int(net),
            order_qty=to_quantity(order_qty),
            estimated_cost=to_int(order_qty * (item.unit_price or 0)),
            avg_daily_sales=to_int(gross / PLANNING_HORIZON_DAYS),
            days_of_stock=round_half_up(days, 1),
            status=status.status,
            status_message=status.message,
        ))

    if today is None:
        today = datetime.strptime(recommendation.order_date, "%Y-%m-%d").date()
    return assemble_recommendation(
        lines, config, today,
        source_errors=recommendation.source_errors,
        inputs_empty=recommendation.inputs_empty,
    )
