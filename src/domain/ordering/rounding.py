"""반올림 헬퍼 (사사오입)

내장 round()는 은행가 반올림(0.5 → 짝수)이므로 발주 수량/통계 표시는
이 함수를 사용한다.
"""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """사사오입 반올림 (digits=0이면 정수 값의 float)"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def to_int(value: float) -> int:
    """사사오입 후 int"""
    return int(round_half_up(value))


def to_quantity(value: float):
    """발주 수량 표시값

    정수면 int, 아니면 소수 6자리까지 유지한다. 소수 포장단위(예: 2.5kg 포대)의
    배수 및 MOQ 이상 조건이 그대로 남는다.
    """
    value = round_half_up(value, 6)
    if value == int(value):
        return int(value)
    return value
