"""
스프레드시트 데이터 소스 (openpyxl)

Usage:
    from src.infrastructure.sheets import WorkbookReader, SheetOrderingSource
"""

from src.infrastructure.sheets.workbook_reader import WorkbookReader  # noqa: F401
from src.infrastructure.sheets.ordering_sheet_source import SheetOrderingSource  # noqa: F401
