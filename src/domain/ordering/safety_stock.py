"""
안전재고 계산

    안전재고 = Z × σ × √L,  L = 리드타임 + 안전재고 일수

일별 수요 분산이 일정하다고 보고 L일 보호기간의 표준편차를 σ×√L로 근사한다.
"""

import math

from src.settings.constants import DEFAULT_Z_SCORE, Z_SCORE_TABLE


def z_score_for(service_level: float) -> float:
    """서비스 수준(%) → Z-Score

    표(90/95/97/99)에 없는 수준은 95% 값(1.65)을 사용한다.
    """
    level = float(service_level)
    if level.is_integer():
        return Z_SCORE_TABLE.get(int(level), DEFAULT_Z_SCORE)
    return DEFAULT_Z_SCORE


def protection_days(lead_time: float, safety_days: float) -> float:
    return max(0.0, lead_time) + max(0.0, safety_days)


def calculate_safety_stock(
    std_dev: float,
    lead_time: float,
    safety_days: float,
    z_score: float,
) -> float:
    """안전재고 (항상 0 이상)

    Args:
        std_dev: 식자재 수요 표준편차
        lead_time: 리드타임 (일)
        safety_days: 안전재고 일수
        z_score: 서비스 수준 Z-Score
    """
    days = protection_days(lead_time, safety_days)
    return max(0.0, z_score) * max(0.0, std_dev) * math.sqrt(days)
