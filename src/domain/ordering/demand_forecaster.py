"""
DemandForecaster -- 요일별 판매 통계

판매 실적을 (메뉴, 요일)로 묶어 평균/표준편차를 구합니다.
표준편차는 모집단 기준(÷n)이며, 평균/표준편차는 소수 1자리로 반올림합니다.

실적이 없는 (메뉴, 요일)은 결과에 나타나지 않습니다. 호출 측(BOM 전개)은
키가 없으면 기본값(계획수량 또는 100, σ=20)을 사용해야 합니다.
"""

import math
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Tuple

from src.domain.models import DayOfWeekStatistic, SalesHistoryRecord
from src.domain.ordering.rounding import round_half_up
from src.utils.date_utils import parse_date
from src.utils.logger import get_logger

logger = get_logger(__name__)

StatKey = Tuple[str, str]


def stat_key(menu_key: str, weekday: str) -> StatKey:
    """통계 조회 키 (메뉴코드 또는 메뉴명, 요일)"""
    return (menu_key, weekday)


def calculate_day_of_week_stats(
    sales_history: Iterable[SalesHistoryRecord],
) -> Dict[StatKey, DayOfWeekStatistic]:
    """메뉴 × 요일별 판매 통계 계산

    Args:
        sales_history: 판매 실적 (예측 기간 내)

    Returns:
        {(menu_key, weekday): DayOfWeekStatistic}
    """
    grouped: Dict[StatKey, List[float]] = {}
    menu_names: Dict[str, str] = {}

    for record in sales_history:
        key = stat_key(record.menu_key, record.weekday)
        grouped.setdefault(key, []).append(float(record.sold_qty))
        menu_names.setdefault(record.menu_key, record.menu_name or record.menu_key)

    stats: Dict[StatKey, DayOfWeekStatistic] = {}
    for (menu_key, weekday), sales in grouped.items():
        n = len(sales)
        avg = sum(sales) / n
        variance = sum((qty - avg) ** 2 for qty in sales) / n
        stats[(menu_key, weekday)] = DayOfWeekStatistic(
            weekday=weekday,
            menu_code=menu_key,
            menu_name=menu_names.get(menu_key, menu_key),
            avg_sales=round_half_up(avg, 1),
            std_dev=round_half_up(math.sqrt(variance), 1),
            max_sales=max(sales),
            min_sales=min(sales),
            sample_count=n,
        )

    logger.info(f"[수요예측] {len(stats)}개 메뉴-요일 통계 계산 완료")
    return stats


def filter_sales_window(
    sales_history: Iterable[SalesHistoryRecord],
    weeks: int,
    today: date,
) -> List[SalesHistoryRecord]:
    """최근 N주(오늘 포함) 실적만 남김. 날짜 해석 실패 행은 제외."""
    if isinstance(today, datetime):
        today = today.date()
    start = (today - timedelta(days=weeks * 7)).isoformat()
    end = today.isoformat()

    result = []
    for record in sales_history:
        parsed = parse_date(record.date)
        if parsed and start <= parsed <= end:
            result.append(record)
    return result
