"""
날짜 유틸리티

시트 셀 값(문자열/숫자/날짜)을 YYYY-MM-DD 문자열로 정규화하고
요일명을 구합니다. 해석할 수 없는 값은 None을 반환합니다.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

from src.settings.constants import WEEKDAY_NAMES

_COMPACT_DATE = re.compile(r"^\d{8}$")
_SEPARATED_DATE = re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})")


def parse_date(value: Any) -> Optional[str]:
    """셀 값 → 'YYYY-MM-DD' (실패 시 None)

    지원 형식:
        - datetime / date 객체
        - YYYYMMDD (숫자 또는 문자열)
        - YYYY-MM-DD, YYYY/MM/DD (월/일 1~2자리)
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    if isinstance(value, float) and value.is_integer():
        text = str(int(value))

    if _COMPACT_DATE.match(text):
        candidate = f"{text[:4]}-{text[4:6]}-{text[6:8]}"
    else:
        match = _SEPARATED_DATE.search(text)
        if not match:
            return None
        candidate = f"{match.group(1)}-{match.group(2).zfill(2)}-{match.group(3).zfill(2)}"

    try:
        datetime.strptime(candidate, "%Y-%m-%d")
    except ValueError:
        return None
    return candidate


def weekday_name(value: Any) -> str:
    """셀 값 → 한글 요일명 ('월'~'일'), 해석 실패 시 빈 문자열"""
    parsed = parse_date(value)
    if not parsed:
        return ""
    return WEEKDAY_NAMES[datetime.strptime(parsed, "%Y-%m-%d").weekday()]


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)
