"""
Repository -- 전체 re-export

Usage:
    from src.infrastructure.database.repos import ErpInventoryRepository
"""

from .erp_inventory_repo import ErpInventoryRepository  # noqa: F401
