"""
ErpInventoryRepository -- ERP 창고 재고 / 발주(미입고) 저장소
"""

from typing import Dict, Optional

from src.infrastructure.database.base_repository import BaseRepository
from src.settings.constants import COMPLETED_ORDER_STATUSES
from src.utils.logger import get_logger

logger = get_logger(__name__)


class ErpInventoryRepository(BaseRepository):
    """ERP 재고/발주 저장소"""

    def save_stock(
        self,
        ingredient_cd: str,
        stock_qty: float,
        warehouse_cd: str = "MAIN",
        ingredient_nm: Optional[str] = None,
    ) -> None:
        """창고 재고 저장 (upsert, 음수 재고는 0으로 저장)

        Args:
            ingredient_cd: 식자재 코드
            stock_qty: 현재고
            warehouse_cd: 창고 코드
            ingredient_nm: 식자재명 (편의용)
        """
        stock_qty = self._to_positive_float(stock_qty)

        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO warehouse_inventory
                    (ingredient_cd, ingredient_nm, warehouse_cd, stock_qty, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(ingredient_cd, warehouse_cd) DO UPDATE SET
                    ingredient_nm = COALESCE(excluded.ingredient_nm, ingredient_nm),
                    stock_qty = excluded.stock_qty,
                    updated_at = excluded.updated_at
                """,
                (ingredient_cd, ingredient_nm, warehouse_cd, stock_qty, self._now()),
            )
            conn.commit()
        finally:
            conn.close()

    def save_purchase_order(
        self,
        order_no: str,
        ingredient_cd: str,
        order_qty: float,
        received_qty: float = 0,
        status: str = "발주",
        order_date: Optional[str] = None,
        supplier_nm: Optional[str] = None,
    ) -> None:
        """발주 행 저장 (upsert)"""
        now = self._now()
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO purchase_orders
                    (order_no, ingredient_cd, order_date, order_qty, received_qty,
                     status, supplier_nm, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(order_no, ingredient_cd) DO UPDATE SET
                    order_qty = excluded.order_qty,
                    received_qty = excluded.received_qty,
                    status = excluded.status,
                    updated_at = excluded.updated_at
                """,
                (
                    order_no, ingredient_cd, order_date,
                    self._to_float(order_qty), self._to_float(received_qty),
                    status, supplier_nm, now, now,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_current_inventory(self) -> Dict[str, float]:
        """품목별 현재고 (전 창고 합산)

        Returns:
            {ingredient_cd: stock_qty}
        """
        conn = self._get_conn()
        try:
            rows = conn.execute(
                """
                SELECT ingredient_cd, SUM(MAX(stock_qty, 0)) AS qty
                FROM warehouse_inventory
                GROUP BY ingredient_cd
                """
            ).fetchall()
        finally:
            conn.close()

        inventory = {row["ingredient_cd"]: float(row["qty"] or 0) for row in rows}
        logger.info(f"[ERP] {len(inventory)}개 품목 재고 조회됨")
        return inventory

    def get_in_transit(self) -> Dict[str, float]:
        """품목별 미입고 수량 (입고완료 제외, 잔량 > 0)

        Returns:
            {ingredient_cd: pending_qty}
        """
        placeholders = ",".join("?" for _ in COMPLETED_ORDER_STATUSES)
        conn = self._get_conn()
        try:
            rows = conn.execute(
                f"""
                SELECT ingredient_cd, order_qty - received_qty AS pending_qty
                FROM purchase_orders
                WHERE COALESCE(status, '') NOT IN ({placeholders})
                ORDER BY id
                """,
                tuple(sorted(COMPLETED_ORDER_STATUSES)),
            ).fetchall()
        finally:
            conn.close()

        in_transit: Dict[str, float] = {}
        for row in rows:
            pending = float(row["pending_qty"] or 0)
            if pending > 0:
                code = row["ingredient_cd"]
                in_transit[code] = in_transit.get(code, 0.0) + pending

        logger.info(f"[ERP] {len(in_transit)}개 품목 미입고 조회됨")
        return in_transit
