"""
통합 설정 진입점

- 프로젝트 경로
- .env 로드 (데이터 소스 위치, 발주 기본 설정)

Usage:
    from src.settings.app_config import WORKBOOK_PATH, ERP_DB_PATH
    from src.settings.constants import DEFAULT_LEAD_TIME
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# ── 프로젝트 경로 ──
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
REPORT_DIR = DATA_DIR / "reports"

# .env 파일 로드 (이미 설정된 환경변수는 덮어쓰지 않음)
load_dotenv(PROJECT_ROOT / ".env")

# ── 데이터 소스 ──
WORKBOOK_PATH = Path(os.getenv("MEAL_PLAN_WORKBOOK_PATH", str(DATA_DIR / "meal_plan.xlsx")))
MEAL_PLAN_SPREADSHEET_ID = os.getenv("MEAL_PLAN_SPREADSHEET_ID", "meal_plan")
ERP_DB_PATH = Path(os.getenv("ERP_DB_PATH", str(DATA_DIR / "erp_inventory.db")))

# ── 웹 ──
WEB_HOST = os.getenv("WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.getenv("WEB_PORT", "5000"))
