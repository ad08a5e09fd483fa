"""
DB 커넥션

ERP 재고 DB(SQLite) 연결을 반환합니다.
- warehouse_inventory: 창고별 현재고
- purchase_orders: 발주/입고 현황
"""

import sqlite3
from pathlib import Path
from typing import Optional

from src.settings.app_config import ERP_DB_PATH
from src.utils.logger import get_logger

logger = get_logger(__name__)


def get_db_path(db_path: Optional[Path] = None) -> Path:
    """ERP DB 경로 (기본: .env ERP_DB_PATH)"""
    path = Path(db_path) if db_path else ERP_DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def get_connection(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """ERP DB 연결 (row_factory=sqlite3.Row)"""
    conn = sqlite3.connect(str(get_db_path(db_path)), timeout=10)
    conn.row_factory = sqlite3.Row
    return conn
