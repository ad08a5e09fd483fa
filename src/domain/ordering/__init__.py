"""
발주 도메인 -- 통계적 발주량 계산 순수 로직

Usage:
    from src.domain.ordering import plan_orders
    from src.domain.ordering.safety_stock import calculate_safety_stock
"""

from src.domain.ordering.planner import (  # noqa: F401
    plan_orders,
    apply_additional_demand,
)
from src.domain.ordering.demand_forecaster import (  # noqa: F401
    calculate_day_of_week_stats,
    filter_sales_window,
)
