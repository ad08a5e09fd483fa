"""
공유 테스트 픽스처

- 샘플 워크북 (식단/판매실적/레시피/식자재 마스터/재고/발주 시트)
- 임시 ERP SQLite DB
- 메모리 데이터 소스 (InMemoryOrderingSource)
- Flask 테스트 앱/클라이언트
"""

import sys
from datetime import date
from pathlib import Path

import pytest
from openpyxl import Workbook

# 프로젝트 루트를 sys.path에 추가
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.domain.models import BOMLine, IngredientMaster, MealPlanEntry, SalesHistoryRecord  # noqa: E402
from src.infrastructure.base_source import OrderingDataSource  # noqa: E402
from src.settings.ordering_config import OrderingConfig  # noqa: E402

# 기준일: 2026-10-19 (월) → 대상 기간 2026-10-21 ~ 2026-10-28
TODAY = date(2026, 10, 19)


class InMemoryOrderingSource(OrderingDataSource):
    """테스트용 데이터 소스

    failing에 입력명(meal_plan, bom_lines 등)을 넣으면 해당 조회에서 예외를 던진다.
    """

    def __init__(self, meal_plan=(), sales_history=(), bom_lines=(), ingredients=(),
                 inventory=None, in_transit=None, failing=()):
        self.meal_plan = list(meal_plan)
        self.sales_history = list(sales_history)
        self.bom_lines = list(bom_lines)
        self.ingredients = list(ingredients)
        self.inventory = dict(inventory or {})
        self.in_transit = dict(in_transit or {})
        self.failing = set(failing)
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if name in self.failing:
            raise ConnectionError(f"{name} 조회 실패 (테스트)")

    def fetch_meal_plan(self, start_date, end_date):
        self._check("meal_plan")
        return [m for m in self.meal_plan if start_date <= m.date <= end_date]

    def fetch_sales_history(self, weeks=4, today=None):
        self._check("sales_history")
        return list(self.sales_history)

    def fetch_bom_lines(self):
        self._check("bom_lines")
        return list(self.bom_lines)

    def fetch_ingredient_master(self, config=None):
        self._check("ingredients")
        return list(self.ingredients)

    def fetch_current_inventory(self):
        self._check("current_inventory")
        return dict(self.inventory)

    def fetch_in_transit_orders(self):
        self._check("in_transit")
        return dict(self.in_transit)


@pytest.fixture
def config():
    """기본 설정 (95%, Z=1.65, 4주, 리드타임 2일, 안전재고 1일)"""
    return OrderingConfig.default()


@pytest.fixture
def sample_source():
    """제육볶음(수) + 된장찌개(목) 식단, 돼지고기/양파 2개 식자재"""
    return InMemoryOrderingSource(
        meal_plan=[
            MealPlanEntry(date="2026-10-21", weekday="수", menu_code="M001", menu_name="제육볶음", planned_qty=120),
            MealPlanEntry(date="2026-10-22", weekday="목", menu_code="M002", menu_name="된장찌개"),
        ],
        sales_history=[
            SalesHistoryRecord(date="2026-09-30", weekday="수", menu_code="M001", menu_name="제육볶음", sold_qty=100),
            SalesHistoryRecord(date="2026-10-07", weekday="수", menu_code="M001", menu_name="제육볶음", sold_qty=110),
            SalesHistoryRecord(date="2026-10-14", weekday="수", menu_code="M001", menu_name="제육볶음", sold_qty=120),
        ],
        bom_lines=[
            BOMLine("M001", "제육볶음", "I001", "돼지고기", 150, "g", 0),
            BOMLine("M001", "제육볶음", "I002", "양파", 50, "g", 10),
            BOMLine("M002", "된장찌개", "I002", "양파", 30, "g", 0),
        ],
        ingredients=[
            IngredientMaster("I001", "돼지고기", "육류", "g", moq=1000, packaging_unit=1000,
                             lead_time=2, safety_days=1, unit_price=12, supplier_name="한돈유통"),
            IngredientMaster("I002", "양파", "채소", "g", moq=1, packaging_unit=500,
                             lead_time=1, safety_days=1, unit_price=3),
        ],
        inventory={"I001": 5000.0, "I002": 0.0},
        in_transit={"I001": 4000.0, "I002": 1500.0},
    )


@pytest.fixture
def sample_workbook(tmp_path):
    """발주 입력 시트 6종이 들어 있는 워크북 파일"""
    wb = Workbook()

    ws = wb.active
    ws.title = "식단_히스토리"
    ws.append(["일자", "요일", "식사", "코너", "메뉴코드", "메뉴명", "계획수량", "판매수량"])
    ws.append(["2026-10-21", "수", "중식", "A코너", "M001", "제육볶음", 120, None])
    ws.append([20261022, None, "중식", "B코너", "M002", "된장찌개", None, None])
    ws.append(["2026/11/3", "화", "중식", "A코너", "M001", "제육볶음", 90, None])
    ws.append(["날짜없음", "수", "중식", "A코너", "M003", "김치전", 50, None])

    ws = wb.create_sheet("판매실적")
    ws.append(["일자", "요일", "메뉴코드", "메뉴명", "코너", "판매수량"])
    ws.append(["2026-08-05", "수", "M001", "제육볶음", "A코너", 300])
    ws.append(["2026-09-30", "수", "M001", "제육볶음", "A코너", 100])
    ws.append(["2026-10-07", "수", "M001", "제육볶음", "A코너", "110"])
    ws.append(["2026-10-14", "수", "M001", "제육볶음", "A코너", 120])

    ws = wb.create_sheet("레시피")
    ws.append(["메뉴코드", "메뉴명", "식자재코드", "식자재명", "소요량", "단위", "로스율"])
    ws.append(["M001", "제육볶음", "I001", "돼지고기", 150, "g", 0])
    ws.append(["M001", "제육볶음", "I002", "양파", 50, "g", 10])
    ws.append(["M002", "된장찌개", "I002", "양파", 30, "g", None])

    ws = wb.create_sheet("식자재_마스터")
    ws.append(["품목코드", "품목명", "분류", "단위", "MOQ", "포장단위", "리드타임", "안전재고일수", "단가", "공급업체"])
    ws.append(["I001", "돼지고기", "육류", "g", 1000, 1000, 2, 1, 12, "한돈유통"])
    ws.append(["I002", "양파", "채소", "g", None, 500, 1, None, "3", None])

    ws = wb.create_sheet("재고현황")
    ws.append(["품목코드", "창고", "재고수량"])
    ws.append(["I001", "MAIN", 3000])
    ws.append(["I001", "SUB", "2,000"])
    ws.append(["I002", "MAIN", -10])

    ws = wb.create_sheet("발주현황")
    ws.append(["발주번호", "품목코드", "발주수량", "입고수량", "상태"])
    ws.append(["PO1", "I001", 5000, 1000, "발주"])
    ws.append(["PO2", "I002", 1000, 1000, "입고완료"])
    ws.append(["PO3", "I002", 2000, 500, "부분입고"])
    ws.append(["PO4", "I002", 300, 400, "발주"])

    path = tmp_path / "meal_plan.xlsx"
    wb.save(path)
    return path


@pytest.fixture
def erp_db_path(tmp_path):
    """임시 ERP DB 경로 (스키마는 저장소 생성 시 자동 생성)"""
    return tmp_path / "erp_inventory.db"


@pytest.fixture
def ordering_service(sample_source, config):
    from src.application.services.ordering_service import StatisticalOrderingService
    return StatisticalOrderingService(source=sample_source, config=config)


@pytest.fixture
def flask_app(ordering_service):
    """Flask 테스트 앱 (메모리 데이터 소스)"""
    from src.web.app import create_app
    app = create_app(service=ordering_service, config={"TESTING": True})
    return app


@pytest.fixture
def client(flask_app):
    """Flask 테스트 클라이언트"""
    return flask_app.test_client()


@pytest.fixture
def today():
    """기준일 (2026-10-19, 월)"""
    return TODAY


@pytest.fixture
def make_source():
    """InMemoryOrderingSource 생성 팩토리"""
    return InMemoryOrderingSource
