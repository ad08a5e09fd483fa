"""엑셀 리포트 패키지"""
from .order_excel_report import OrderExcelReport

__all__ = [
    "OrderExcelReport",
]
