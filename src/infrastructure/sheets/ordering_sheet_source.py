"""
SheetOrderingSource -- 식단/판매실적/레시피/식자재/재고/발주 시트 → 도메인 레코드

시트마다 컬럼명이 조금씩 달라 여러 별칭을 순서대로 확인합니다.
별칭 값이 비어 있으면(빈 문자열/0/None) 다음 별칭을 확인합니다.

Usage:
    source = SheetOrderingSource(WorkbookReader(WORKBOOK_PATH))
    meal_plan = source.fetch_meal_plan("2026-10-20", "2026-10-27")
    inventory = source.fetch_current_inventory()
"""

from datetime import date
from typing import Any, Dict, List, Optional

from src.domain.models import BOMLine, IngredientMaster, MealPlanEntry, SalesHistoryRecord
from src.domain.ordering.demand_forecaster import filter_sales_window
from src.infrastructure.base_source import OrderingDataSource
from src.infrastructure.sheets.workbook_reader import Row, WorkbookReader
from src.settings.constants import (
    BOM_SHEETS,
    COMPLETED_ORDER_STATUSES,
    DEFAULT_CATEGORY,
    DEFAULT_CORNER,
    DEFAULT_LEAD_TIME,
    DEFAULT_MEAL_TYPE,
    DEFAULT_SAFETY_DAYS,
    DEFAULT_UNIT,
    INGREDIENT_MASTER_SHEETS,
    INVENTORY_SHEETS,
    MEAL_PLAN_SHEET,
    PURCHASE_ORDER_SHEETS,
    SALES_SHEET,
)
from src.utils.date_utils import parse_date, weekday_name
from src.utils.logger import get_logger

logger = get_logger(__name__)


def pick(row: Row, *aliases: str, default: Any = None) -> Any:
    """별칭 순서대로 첫 번째 유효 값"""
    for alias in aliases:
        value = row.get(alias)
        if value not in (None, "", 0):
            return value
    return default


def to_number(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        if isinstance(value, str):
            value = value.replace(",", "")
        return float(value)
    except (TypeError, ValueError):
        return default


def to_text(value: Any) -> str:
    """코드 값 → 문자열 (1001.0 → '1001')"""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _to_int_if_whole(value: float):
    return int(value) if float(value).is_integer() else value


class SheetOrderingSource(OrderingDataSource):
    """워크북 기반 발주 입력 데이터 소스"""

    def __init__(self, reader: WorkbookReader):
        self.reader = reader

    # ----------------------------------------
    # 식단 계획
    # ----------------------------------------

    def fetch_meal_plan(self, start_date: str, end_date: str) -> List[MealPlanEntry]:
        """대상 기간 식단 계획 (날짜 해석 실패 행 제외)"""
        logger.info(f"[시트] 식단 계획 조회: {start_date} ~ {end_date}")
        rows = self.reader.read_sheet(MEAL_PLAN_SHEET)

        meal_plan = []
        for row in rows:
            raw_date = pick(row, "일자", "날짜", "date")
            parsed = parse_date(raw_date)
            if not parsed or not (start_date <= parsed <= end_date):
                continue
            planned = pick(row, "계획수량", "예상식수")
            meal_plan.append(MealPlanEntry(
                date=parsed,
                weekday=to_text(pick(row, "요일")) or weekday_name(raw_date),
                meal_type=to_text(pick(row, "식사", "식사구분", default=DEFAULT_MEAL_TYPE)),
                corner=to_text(pick(row, "코너", "코너명", default=DEFAULT_CORNER)),
                menu_code=to_text(pick(row, "메뉴코드", "품목코드", default="")),
                menu_name=to_text(pick(row, "메뉴", "메뉴명", "품목명", default="")),
                planned_qty=to_number(planned) if planned is not None else None,
            ))

        logger.info(f"[시트] 식단 {len(meal_plan)}건 조회됨")
        return meal_plan

    # ----------------------------------------
    # 판매 실적
    # ----------------------------------------

    def fetch_sales_history(self, weeks: int = 4, today: Optional[date] = None) -> List[SalesHistoryRecord]:
        """최근 N주 판매 실적

        판매실적 시트가 없으면 식단_히스토리에서 판매수량이 있는 행을 사용한다.
        """
        today = today or date.today()
        logger.info(f"[시트] 최근 {weeks}주 판매 실적 조회")

        rows = self.reader.read_sheet(SALES_SHEET)
        qty_aliases = ("판매수량", "판매량")
        if not rows:
            rows = [r for r in self.reader.read_sheet(MEAL_PLAN_SHEET) if pick(r, "판매수량")]
            qty_aliases = ("판매수량", "실판매")

        records = []
        for row in rows:
            raw_date = pick(row, "일자", "날짜")
            parsed = parse_date(raw_date)
            if not parsed:
                continue
            records.append(SalesHistoryRecord(
                date=parsed,
                weekday=to_text(pick(row, "요일")) or weekday_name(raw_date),
                menu_code=to_text(pick(row, "메뉴코드", "품목코드", default="")),
                menu_name=to_text(pick(row, "메뉴", "메뉴명", default="")),
                corner=to_text(pick(row, "코너", default=DEFAULT_CORNER)),
                sold_qty=to_number(pick(row, *qty_aliases, default=0)),
            ))

        records = filter_sales_window(records, weeks, today)
        logger.info(f"[시트] 판매 실적 {len(records)}건 조회됨")
        return records

    # ----------------------------------------
    # 레시피(BOM) / 식자재 마스터
    # ----------------------------------------

    def fetch_bom_lines(self) -> List[BOMLine]:
        sheet_name, rows = self.reader.read_first_available(BOM_SHEETS)
        bom_lines = [
            BOMLine(
                menu_code=to_text(pick(row, "메뉴코드", "완제품코드", "상위품목", default="")),
                menu_name=to_text(pick(row, "메뉴명", "완제품명", "상위품명", default="")),
                ingredient_code=to_text(pick(row, "식자재코드", "원자재코드", "하위품목", default="")),
                ingredient_name=to_text(pick(row, "식자재명", "원자재명", "하위품명", default="")),
                required_qty=to_number(pick(row, "소요량", "필요수량", "수량", default=0)),
                unit=to_text(pick(row, "단위", default=DEFAULT_UNIT)),
                loss_rate=to_number(pick(row, "로스율", "손실율", default=0)),
            )
            for row in rows
        ]
        logger.info(f"[시트] 레시피 {len(bom_lines)}건 조회됨 (시트: {sheet_name})")
        return bom_lines

    def fetch_ingredient_master(self, config=None) -> List[IngredientMaster]:
        """식자재 마스터 (리드타임/안전재고 일수 누락 시 설정 기본값)"""
        default_lead_time = config.default_lead_time if config else DEFAULT_LEAD_TIME
        default_safety_days = config.safety_days if config else DEFAULT_SAFETY_DAYS

        sheet_name, rows = self.reader.read_first_available(INGREDIENT_MASTER_SHEETS)
        ingredients = []
        for row in rows:
            supplier_code = pick(row, "공급업체코드")
            ingredients.append(IngredientMaster(
                ingredient_code=to_text(pick(row, "품목코드", "자재코드", "코드", default="")),
                ingredient_name=to_text(pick(row, "품목명", "자재명", "이름", default="")),
                category=to_text(pick(row, "분류", "카테고리", default=DEFAULT_CATEGORY)),
                unit=to_text(pick(row, "단위", default=DEFAULT_UNIT)),
                moq=_to_int_if_whole(to_number(pick(row, "MOQ", "최소발주량", default=1), 1)),
                packaging_unit=_to_int_if_whole(to_number(pick(row, "포장단위", "구매단위", default=1), 1)),
                lead_time=int(to_number(pick(row, "리드타임", "납기"), default_lead_time)),
                safety_days=int(to_number(pick(row, "안전재고일수"), default_safety_days)),
                unit_price=to_number(pick(row, "단가", "매입단가", default=0)),
                supplier_code=to_text(supplier_code) if supplier_code is not None else None,
                supplier_name=to_text(pick(row, "공급업체", "거래처", default="")),
            ))
        logger.info(f"[시트] 식자재 마스터 {len(ingredients)}건 조회됨 (시트: {sheet_name})")
        return ingredients

    # ----------------------------------------
    # 재고 / 미입고
    # ----------------------------------------

    def fetch_current_inventory(self) -> Dict[str, float]:
        """품목별 현재고 (창고 합산, 음수는 0)"""
        _, rows = self.reader.read_first_available(INVENTORY_SHEETS)
        inventory: Dict[str, float] = {}
        for row in rows:
            code = to_text(pick(row, "품목코드", "자재코드", default=""))
            if not code:
                continue
            qty = max(0.0, to_number(pick(row, "재고수량", "현재고", "수량", default=0)))
            inventory[code] = inventory.get(code, 0.0) + qty

        logger.info(f"[시트] {len(inventory)}개 품목 재고 조회됨")
        return inventory

    def fetch_in_transit_orders(self) -> Dict[str, float]:
        """품목별 미입고 수량 (입고완료 제외, 잔량 > 0만)"""
        _, rows = self.reader.read_first_available(PURCHASE_ORDER_SHEETS)
        in_transit: Dict[str, float] = {}
        for row in rows:
            status = to_text(pick(row, "상태", "입고상태", default=""))
            if status in COMPLETED_ORDER_STATUSES:
                continue
            code = to_text(pick(row, "품목코드", "자재코드", default=""))
            pending = to_number(pick(row, "발주수량", "수량", default=0)) - to_number(pick(row, "입고수량", default=0))
            if code and pending > 0:
                in_transit[code] = in_transit.get(code, 0.0) + pending

        logger.info(f"[시트] {len(in_transit)}개 품목 미입고 조회됨")
        return in_transit
