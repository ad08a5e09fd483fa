"""
NetRequirementResolver -- 순소요량 및 발주량 보정 순수 로직

계산 순서:
    1. 총소요량 = 총수요 + 안전재고
    2. 가용재고 = 현재고 + 미입고
    3. 순소요량 = max(0, 총소요량 - 가용재고)
    4. 발주량 = max(순소요량, MOQ) → 포장단위 배수로 올림 (순소요량 0이면 0)
    5. 예상금액 = 발주량 × 단가

중간 계산은 float으로 유지하고, 정수 반올림은 결과 행을 만들 때만 한다.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping

from src.domain.models import IngredientMaster
from src.settings.constants import DEFAULT_CATEGORY, DEFAULT_UNIT


@dataclass(frozen=True)
class NetRequirement:
    """순소요량 계산 결과 (float, 반올림 전)"""
    gross_qty: float
    safety_stock: float
    total_requirement: float
    current_stock: float
    in_transit: float
    available_stock: float
    net_requirement: float
    order_qty: float
    estimated_cost: float


def build_master_index(ingredients: Iterable[IngredientMaster]) -> Dict[str, IngredientMaster]:
    """식자재 마스터 → {ingredient_key: master} (중복 키는 마지막 행 우선)"""
    return {m.ingredient_key: m for m in ingredients if m.ingredient_key}


def default_master(ingredient_key: str, config) -> IngredientMaster:
    """마스터 누락 식자재의 기본 레코드"""
    return IngredientMaster(
        ingredient_code=ingredient_key,
        ingredient_name=ingredient_key,
        category=DEFAULT_CATEGORY,
        unit=DEFAULT_UNIT,
        moq=1,
        packaging_unit=1,
        lead_time=config.default_lead_time,
        safety_days=config.safety_days,
        unit_price=0,
    )


def resolve_master(
    ingredient_key: str,
    master_index: Mapping[str, IngredientMaster],
    config,
) -> IngredientMaster:
    """마스터 조회 (없으면 기본 레코드). 항상 완전한 값 객체를 반환한다."""
    master = master_index.get(ingredient_key)
    if master is None:
        return default_master(ingredient_key, config)
    return master


def round_to_packaging(qty: float, moq: float, packaging_unit: float) -> float:
    """MOQ 적용 후 포장단위 올림

    Args:
        qty: 순소요량
        moq: 최소 발주량
        packaging_unit: 포장단위 (1 이하면 올림 없음)

    Returns:
        보정된 발주량 (qty <= 0이면 0)
    """
    if qty <= 0:
        return 0.0

    order_qty = max(qty, moq or 0)
    if packaging_unit and packaging_unit > 1:
        order_qty = math.ceil(order_qty / packaging_unit) * packaging_unit
    return float(order_qty)


def resolve_net_requirement(
    gross_qty: float,
    safety_stock: float,
    master: IngredientMaster,
    on_hand: float = 0.0,
    in_transit: float = 0.0,
) -> NetRequirement:
    """총소요량/안전재고를 가용재고와 상계하여 발주량 산출"""
    current_stock = max(0.0, on_hand or 0.0)
    in_transit = max(0.0, in_transit or 0.0)

    total_requirement = gross_qty + safety_stock
    available_stock = current_stock + in_transit
    net_requirement = max(0.0, total_requirement - available_stock)
    order_qty = round_to_packaging(net_requirement, master.moq, master.packaging_unit)

    return NetRequirement(
        gross_qty=gross_qty,
        safety_stock=safety_stock,
        total_requirement=total_requirement,
        current_stock=current_stock,
        in_transit=in_transit,
        available_stock=available_stock,
        net_requirement=net_requirement,
        order_qty=order_qty,
        estimated_cost=order_qty * (master.unit_price or 0),
    )
