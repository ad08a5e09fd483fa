"""
Infrastructure 계층 -- 모든 I/O 관련 모듈

서브패키지:
- sheets: 식단/실적/레시피/마스터 워크북 조회 (openpyxl)
- database: ERP 재고/발주 DB (SQLite)
"""
