"""
StatusClassifier -- 발주 긴급도 판정

판정 규칙은 (상태, 조건, 메시지) 순서 목록이며 처음 맞는 규칙이 적용된다.

    1. shortage : 재고일수 < 리드타임
    2. urgent   : 순소요량 > 0 and 재고일수 < 리드타임 + 2
    3. overstock: 가용재고 > 총소요량 × 3
    4. normal
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple, TypeVar

from src.settings.constants import (
    OVERSTOCK_FACTOR,
    STATUS_NORMAL,
    STATUS_OVERSTOCK,
    STATUS_PRIORITY,
    STATUS_SHORTAGE,
    STATUS_URGENT,
    STOCK_DAYS_SENTINEL,
    URGENT_MARGIN_DAYS,
)

T = TypeVar("T")


@dataclass(frozen=True)
class StockPosition:
    """판정 입력"""
    days_of_stock: float
    lead_time: float
    net_requirement: float
    available_stock: float
    total_requirement: float


@dataclass(frozen=True)
class StatusResult:
    status: str
    message: str = ""


def days_of_stock(available_stock: float, gross_qty: float, horizon_days: int = 7) -> float:
    """가용재고로 버틸 수 있는 일수 (소요량 0이면 999)"""
    if gross_qty <= 0:
        return float(STOCK_DAYS_SENTINEL)
    return available_stock / (gross_qty / horizon_days)


STATUS_RULES: List[Tuple[str, Callable[[StockPosition], bool], str]] = [
    (
        STATUS_SHORTAGE,
        lambda p: p.days_of_stock < p.lead_time,
        "재고 {days:.1f}일분 - 긴급발주 필요",
    ),
    (
        STATUS_URGENT,
        lambda p: p.net_requirement > 0 and p.days_of_stock < p.lead_time + URGENT_MARGIN_DAYS,
        "재고 {days:.1f}일분 - 빠른 발주 권장",
    ),
    (
        STATUS_OVERSTOCK,
        lambda p: p.available_stock > p.total_requirement * OVERSTOCK_FACTOR,
        "과재고 상태",
    ),
]


def classify_status(position: StockPosition) -> StatusResult:
    """처음 맞는 규칙의 상태 반환 (없으면 normal)"""
    for status, predicate, template in STATUS_RULES:
        if predicate(position):
            return StatusResult(status, template.format(days=position.days_of_stock))
    return StatusResult(STATUS_NORMAL, "")


def sort_by_status(items: Iterable[T], key: Callable[[T], str] = lambda item: item.status) -> List[T]:
    """부족 → 긴급 → 일반 → 과재고 순 정렬 (같은 상태는 기존 순서 유지)"""
    return sorted(items, key=lambda item: STATUS_PRIORITY.get(key(item), len(STATUS_PRIORITY)))
