"""
WorkbookReader -- 스프레드시트(.xlsx) 시트 조회

첫 행을 헤더로 보고 각 행을 {헤더: 값} 딕셔너리로 변환합니다.
'3,500' 같은 숫자 문자열은 숫자로 변환하고, 빈 행은 건너뜁니다.

Usage:
    reader = WorkbookReader(Path("data/meal_plan.xlsx"))
    rows = reader.read_sheet("식단_히스토리")
    sheet_name, rows = reader.read_first_available(("레시피", "BOM"))
"""

import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from openpyxl import load_workbook

from src.utils.logger import get_logger

logger = get_logger(__name__)

# 앞자리 0이 있는 코드('001')는 숫자로 바꾸지 않는다
_NUMERIC_TEXT = re.compile(r"^-?(0|[1-9][\d,]*)(\.\d+)?$")

Row = Dict[str, Any]


def coerce_cell(value: Any) -> Any:
    """셀 값 정규화 (숫자 문자열 → 숫자, 공백 제거)"""
    if isinstance(value, str):
        text = value.strip()
        if _NUMERIC_TEXT.match(text):
            number = float(text.replace(",", ""))
            return int(number) if number.is_integer() else number
        return text
    return value


class WorkbookReader:
    """엑셀 워크북 시트 리더 (읽기 전용)"""

    def __init__(self, workbook_path: Path):
        self.workbook_path = Path(workbook_path)

    def sheet_names(self) -> List[str]:
        workbook = self._open()
        try:
            return list(workbook.sheetnames)
        finally:
            workbook.close()

    def read_sheet(self, sheet_name: str) -> List[Row]:
        """시트 → 행 딕셔너리 목록 (시트 없으면 [])

        Raises:
            FileNotFoundError: 워크북 파일이 없을 때
        """
        workbook = self._open()
        try:
            if sheet_name not in workbook.sheetnames:
                logger.debug(f"시트 없음: {sheet_name}")
                return []
            rows = workbook[sheet_name].iter_rows(values_only=True)
            return self._to_dicts(rows)
        finally:
            workbook.close()

    def read_first_available(self, sheet_names: Iterable[str]) -> Tuple[Optional[str], List[Row]]:
        """후보 시트 중 처음으로 데이터가 있는 시트 조회

        Returns:
            (시트명, 행 목록). 모두 비어 있으면 (None, [])
        """
        for name in sheet_names:
            rows = self.read_sheet(name)
            if rows:
                return name, rows
        return None, []

    def _open(self):
        if not self.workbook_path.exists():
            raise FileNotFoundError(f"워크북 파일 없음: {self.workbook_path}")
        return load_workbook(self.workbook_path, read_only=True, data_only=True)

    @staticmethod
    def _to_dicts(rows: Iterable[tuple]) -> List[Row]:
        rows = iter(rows)
        header_row = next(rows, None)
        if not header_row:
            return []

        headers = [str(h).strip() if h is not None else "" for h in header_row]
        result = []
        for values in rows:
            if values is None or all(v is None or v == "" for v in values):
                continue
            row = {}
            for idx, header in enumerate(headers):
                if not header:
                    continue
                value = values[idx] if idx < len(values) else None
                row[header] = "" if value is None else coerce_cell(value)
            result.append(row)
        return result
