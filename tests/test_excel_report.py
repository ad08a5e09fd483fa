"""발주 권고 엑셀 리포트 테스트"""

from dataclasses import replace

import pytest
from openpyxl import load_workbook

from src.domain.models import PlanningInputs
from src.domain.ordering import plan_orders
from src.report.order_excel_report import DETAIL_COLUMNS, OrderExcelReport


@pytest.fixture
def recommendation(sample_source, config, today):
    inputs = PlanningInputs(
        meal_plan=tuple(sample_source.meal_plan),
        sales_history=tuple(sample_source.sales_history),
        bom_lines=tuple(sample_source.bom_lines),
        ingredients=tuple(sample_source.ingredients),
        current_inventory=dict(sample_source.inventory),
        in_transit=dict(sample_source.in_transit),
    )
    return plan_orders(inputs, config, today=today)


class TestOrderExcelReport:

    @pytest.mark.integration
    def test_generate_file(self, recommendation, tmp_path):
        path = OrderExcelReport(output_dir=tmp_path).generate(recommendation)

        assert path.exists()
        assert path.name == "2026-10-19_발주권고.xlsx"
        wb = load_workbook(path)
        assert wb.sheetnames == ["발주권고", "요약"]

    @pytest.mark.integration
    def test_detail_rows(self, recommendation, tmp_path):
        path = OrderExcelReport(output_dir=tmp_path).generate(recommendation)
        ws = load_workbook(path)["발주권고"]

        headers = [ws.cell(row=3, column=c).value for c in range(1, len(DETAIL_COLUMNS) + 1)]
        assert headers[:3] == ["상태", "식자재코드", "식자재명"]

        order_col = headers.index("발주량") + 1
        assert ws.cell(row=4, column=2).value == "I001"
        assert ws.cell(row=4, column=1).value == "긴급"
        assert ws.cell(row=4, column=order_col).value == 12000
        assert ws.cell(row=5, column=2).value == "I002"
        assert ws.cell(row=6, column=2).value is None

    @pytest.mark.integration
    def test_summary_sheet(self, recommendation, tmp_path):
        path = OrderExcelReport(output_dir=tmp_path).generate(recommendation)
        ws = load_workbook(path)["요약"]

        summary = {ws.cell(row=r, column=1).value: ws.cell(row=r, column=2).value for r in range(3, 14)}
        assert summary["품목 수"] == 2
        assert summary["조회 실패 소스"] == "-"
        assert summary["예상 발주금액"] == 172500
        assert summary["대상 기간"] == "2026-10-21 ~ 2026-10-28"

    @pytest.mark.integration
    def test_to_bytes(self, recommendation):
        buffer = OrderExcelReport().to_bytes(recommendation)
        assert buffer.read(2) == b"PK"

    @pytest.mark.integration
    def test_summary_lists_failed_sources(self, recommendation, tmp_path):
        failed = replace(recommendation, source_errors=("current_inventory", "in_transit"))
        path = OrderExcelReport(output_dir=tmp_path).generate(failed)
        ws = load_workbook(path)["요약"]

        summary = {ws.cell(row=r, column=1).value: ws.cell(row=r, column=2).value for r in range(3, 14)}
        assert summary["조회 실패 소스"] == "current_inventory, in_transit"
