"""
ERP 재고 DB 스키마

init_db()는 여러 번 호출해도 안전합니다 (CREATE ... IF NOT EXISTS).
"""

import sqlite3
from pathlib import Path
from typing import Optional

from src.infrastructure.database.connection import get_connection
from src.utils.logger import get_logger

logger = get_logger(__name__)

ERP_SCHEMA = """
CREATE TABLE IF NOT EXISTS warehouse_inventory (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    ingredient_cd TEXT NOT NULL,
    ingredient_nm TEXT,
    warehouse_cd TEXT NOT NULL DEFAULT 'MAIN',
    stock_qty REAL DEFAULT 0,
    updated_at TEXT,
    UNIQUE(ingredient_cd, warehouse_cd)
);

CREATE TABLE IF NOT EXISTS purchase_orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    order_no TEXT NOT NULL,
    ingredient_cd TEXT NOT NULL,
    order_date TEXT,
    order_qty REAL DEFAULT 0,
    received_qty REAL DEFAULT 0,
    status TEXT DEFAULT '발주',
    supplier_nm TEXT,
    created_at TEXT,
    updated_at TEXT,
    UNIQUE(order_no, ingredient_cd)
);

CREATE INDEX IF NOT EXISTS idx_purchase_orders_status ON purchase_orders(status);
"""


def init_db_connection(conn: sqlite3.Connection) -> None:
    """열린 커넥션에 스키마 적용 (in-memory 테스트 DB용)"""
    conn.executescript(ERP_SCHEMA)
    conn.commit()


def init_db(db_path: Optional[Path] = None) -> None:
    """ERP DB 초기화"""
    conn = get_connection(db_path)
    try:
        init_db_connection(conn)
        logger.info(f"ERP DB 스키마 적용 완료: {db_path or 'default'}")
    finally:
        conn.close()
