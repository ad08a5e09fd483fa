"""
통계적 발주 - 비즈니스 상수
- 서비스 수준 / Z-Score
- 기본값 (리드타임, 안전재고 일수, 예측 기간)
- 상태 문자열 / 정렬 우선순위
- 시트명 후보

정식 경로: from src.settings.constants import ...
"""

# =====================================================================
# 서비스 수준 → Z-Score
# =====================================================================
Z_SCORE_TABLE = {
    90: 1.28,
    95: 1.65,
    97: 1.88,
    99: 2.33,
}
DEFAULT_SERVICE_LEVEL = 95
DEFAULT_Z_SCORE = Z_SCORE_TABLE[DEFAULT_SERVICE_LEVEL]

# =====================================================================
# 기본값
# =====================================================================
DEFAULT_FORECAST_WEEKS = 4        # 판매 통계 조회 기간 (주)
DEFAULT_LEAD_TIME = 2             # 기본 리드타임 (일)
DEFAULT_SAFETY_DAYS = 1           # 기본 안전재고 일수
PLANNING_HORIZON_DAYS = 7         # 발주 대상 기간 (일)

FALLBACK_FORECAST_QTY = 100       # 판매 통계/계획수량 모두 없을 때 예상 식수
FALLBACK_STD_DEV = 20             # 판매 통계 없을 때 표준편차

DEFAULT_CATEGORY = "기타"
DEFAULT_UNIT = "g"
DEFAULT_MEAL_TYPE = "중식"
DEFAULT_CORNER = "A코너"

# =====================================================================
# 상태 판단
# =====================================================================
STOCK_DAYS_SENTINEL = 999         # 소요량 0일 때 재고일수 (충분)
URGENT_MARGIN_DAYS = 2            # 리드타임 + N일 미만이면 긴급
OVERSTOCK_FACTOR = 3              # 총소요량 N배 초과 가용재고 → 과재고

STATUS_SHORTAGE = "shortage"
STATUS_URGENT = "urgent"
STATUS_NORMAL = "normal"
STATUS_OVERSTOCK = "overstock"

# 정렬: 부족 → 긴급 → 일반 → 과재고
STATUS_PRIORITY = {
    STATUS_SHORTAGE: 0,
    STATUS_URGENT: 1,
    STATUS_NORMAL: 2,
    STATUS_OVERSTOCK: 3,
}

# =====================================================================
# 데이터 소스 (시트명 후보, 순서대로 조회)
# =====================================================================
MEAL_PLAN_SHEET = "식단_히스토리"
SALES_SHEET = "판매실적"
BOM_SHEETS = ("레시피", "BOM", "메뉴_BOM", "자재명세서")
INGREDIENT_MASTER_SHEETS = ("식자재_마스터", "품목마스터", "자재마스터", "원자재")
INVENTORY_SHEETS = ("재고현황", "창고재고", "재고")
PURCHASE_ORDER_SHEETS = ("발주현황", "미입고발주", "발주")

# 입고 완료 상태 (미입고 계산에서 제외)
COMPLETED_ORDER_STATUSES = frozenset({"입고완료", "완료", "received"})

WEEKDAY_NAMES = ("월", "화", "수", "목", "금", "토", "일")  # date.weekday() 순서
