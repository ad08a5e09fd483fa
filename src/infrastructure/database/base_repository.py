"""
BaseRepository -- 모든 Repository의 기반 클래스

DB 경로를 받아 연결을 만들고, 값 변환 헬퍼를 제공합니다.
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from src.infrastructure.database.connection import get_connection, get_db_path
from src.utils.logger import get_logger

logger = get_logger(__name__)


class BaseRepository:
    """기본 저장소 클래스

    Usage:
        class ErpInventoryRepository(BaseRepository):
            ...

        repo = ErpInventoryRepository(db_path=Path("data/erp_inventory.db"))
        conn = repo._get_conn()
    """

    def __init__(self, db_path: Optional[Path] = None):
        """초기화

        Args:
            db_path: DB 경로 (None이면 .env ERP_DB_PATH). 파일이 없으면 스키마 생성.
        """
        self._db_path = get_db_path(db_path)

        if not self._db_path.exists():
            from src.infrastructure.database.schema import init_db
            init_db(self._db_path)

    def _get_conn(self) -> sqlite3.Connection:
        return get_connection(self._db_path)

    def _now(self) -> str:
        """현재 시각 ISO 포맷"""
        return datetime.now().isoformat()

    def _to_float(self, value: Any) -> float:
        """값을 실수로 변환 (실패 시 0)"""
        if value is None or value == "":
            return 0.0
        try:
            if isinstance(value, str):
                value = value.replace(",", "")
            return float(value)
        except (ValueError, TypeError):
            return 0.0

    def _to_positive_float(self, value: Any) -> float:
        """값을 0 이상의 실수로 변환 (음수 → 0)"""
        return max(0.0, self._to_float(value))
