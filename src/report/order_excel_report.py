"""
발주 권고 엑셀 생성기

  시트1: 발주권고 (식자재별 소요량/안전재고/재고/발주량/상태)
  시트2: 요약 (대상 기간, 품목수, 긴급/부족 건수, 예상금액, 설정)

출력 경로: data/reports/ordering/YYYY-MM-DD_발주권고.xlsx
"""

import io
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from src.domain.models import OrderRecommendation
from src.settings.app_config import REPORT_DIR
from src.settings.constants import STATUS_OVERSTOCK, STATUS_SHORTAGE, STATUS_URGENT
from src.utils.logger import get_logger

logger = get_logger(__name__)

OUTPUT_DIR = REPORT_DIR / "ordering"

# 스타일 정의
HEADER_FONT = Font(name="맑은 고딕", bold=True, size=11, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
TITLE_FONT = Font(name="맑은 고딕", bold=True, size=14)
DATA_FONT = Font(name="맑은 고딕", size=10)
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
STATUS_FILLS = {
    STATUS_SHORTAGE: PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid"),
    STATUS_URGENT: PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid"),
    STATUS_OVERSTOCK: PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid"),
}
STATUS_LABELS = {
    STATUS_SHORTAGE: "부족",
    STATUS_URGENT: "긴급",
    STATUS_OVERSTOCK: "과재고",
}

# (헤더, OrderCalculationLine 속성, 열 너비)
DETAIL_COLUMNS = [
    ("상태", "status", 8),
    ("식자재코드", "ingredient_code", 14),
    ("식자재명", "ingredient_name", 20),
    ("분류", "category", 10),
    ("단위", "unit", 6),
    ("총수요", "gross_requirement", 10),
    ("안전재고", "safety_stock", 10),
    ("총소요량", "total_requirement", 10),
    ("현재고", "current_stock", 10),
    ("미입고", "in_transit", 10),
    ("순소요량", "net_requirement", 10),
    ("발주량", "order_qty", 10),
    ("MOQ", "moq", 8),
    ("포장단위", "packaging_unit", 8),
    ("단가", "unit_price", 10),
    ("예상금액", "estimated_cost", 12),
    ("재고일수", "days_of_stock", 9),
    ("공급업체", "supplier_name", 14),
    ("비고", "status_message", 28),
]


class OrderExcelReport:
    """발주 권고 엑셀 생성기"""

    def __init__(self, output_dir: Optional[Path] = None) -> None:
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR

    def build_workbook(self, recommendation: OrderRecommendation) -> Workbook:
        wb = Workbook()
        self._write_detail_sheet(wb.active, recommendation)
        self._write_summary_sheet(wb.create_sheet("요약"), recommendation)
        return wb

    def generate(self, recommendation: OrderRecommendation) -> Path:
        """엑셀 파일 저장

        Returns:
            생성된 엑셀 파일 경로
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / f"{recommendation.order_date}_발주권고.xlsx"
        self.build_workbook(recommendation).save(output_path)
        logger.info(f"[리포트] 발주 권고 엑셀 저장: {output_path}")
        return output_path

    def to_bytes(self, recommendation: OrderRecommendation) -> io.BytesIO:
        """다운로드용 메모리 버퍼"""
        buffer = io.BytesIO()
        self.build_workbook(recommendation).save(buffer)
        buffer.seek(0)
        return buffer

    def _write_detail_sheet(self, ws, recommendation: OrderRecommendation) -> None:
        ws.title = "발주권고"
        ws.cell(row=1, column=1, value=(
            f"발주 권고 ({recommendation.target_period_start} ~ {recommendation.target_period_end})"
        )).font = TITLE_FONT

        header_row = 3
        for col, (header, _, width) in enumerate(DETAIL_COLUMNS, start=1):
            cell = ws.cell(row=header_row, column=col, value=header)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal="center")
            cell.border = THIN_BORDER
            ws.column_dimensions[get_column_letter(col)].width = width

        for row_idx, item in enumerate(recommendation.items, start=header_row + 1):
            fill = STATUS_FILLS.get(item.status)
            for col, (_, attr, _) in enumerate(DETAIL_COLUMNS, start=1):
                value = getattr(item, attr)
                if attr == "status":
                    value = STATUS_LABELS.get(value, "정상")
                cell = ws.cell(row=row_idx, column=col, value=value)
                cell.font = DATA_FONT
                cell.border = THIN_BORDER
                if fill is not None:
                    cell.fill = fill

        ws.freeze_panes = ws.cell(row=header_row + 1, column=1)

    def _write_summary_sheet(self, ws, recommendation: OrderRecommendation) -> None:
        ws.cell(row=1, column=1, value="발주 요약").font = TITLE_FONT
        rows = [
            ("발주일", recommendation.order_date),
            ("입고 예정일", recommendation.delivery_date),
            ("대상 기간", f"{recommendation.target_period_start} ~ {recommendation.target_period_end}"),
            ("품목 수", recommendation.total_items),
            ("긴급 품목", recommendation.urgent_items),
            ("부족 품목", recommendation.shortage_items),
            ("예상 발주금액", recommendation.total_estimated_cost),
            ("서비스 수준(%)", recommendation.service_level),
            ("예측 기간(주)", recommendation.forecast_weeks),
            ("리드타임(일)", recommendation.lead_time_days),
            ("조회 실패 소스", ", ".join(recommendation.source_errors) or "-"),
        ]
        for row_idx, (label, value) in enumerate(rows, start=3):
            label_cell = ws.cell(row=row_idx, column=1, value=label)
            label_cell.font = Font(name="맑은 고딕", bold=True, size=10)
            label_cell.border = THIN_BORDER
            value_cell = ws.cell(row=row_idx, column=2, value=value)
            value_cell.font = DATA_FONT
            value_cell.border = THIN_BORDER
        ws.column_dimensions["A"].width = 16
        ws.column_dimensions["B"].width = 26
