"""통계적 발주 REST API

모든 응답은 {"success": bool, "data": ...} 형식.
"""

from datetime import date, timedelta

from flask import Blueprint, current_app, jsonify, request, send_file

from src.domain.models import as_list
from src.report.order_excel_report import OrderExcelReport
from src.settings.constants import PLANNING_HORIZON_DAYS
from src.utils.date_utils import parse_date
from src.utils.logger import get_logger

logger = get_logger(__name__)

ordering_bp = Blueprint("ordering", __name__)


def _service():
    return current_app.config["ORDERING_SERVICE"]


def _ok(data, **extra):
    return jsonify({"success": True, "data": data, **extra})


def _fail(message: str, status: int = 500):
    return jsonify({"success": False, "error": message}), status


def _int_arg(name: str, default: int) -> int:
    value = request.args.get(name)
    if value in (None, ""):
        return default
    number = int(value)
    if number < 1:
        raise ValueError(f"{name}는 1 이상이어야 합니다")
    return number


@ordering_bp.route("/recommendation", methods=["GET"])
def get_recommendation():
    """발주 권고 생성"""
    try:
        recommendation = _service().generate_recommendation()
        return _ok(recommendation.to_dict())
    except Exception as e:
        logger.error(f"발주 권고 생성 실패: {e}", exc_info=True)
        return _fail("발주 권고 생성에 실패했습니다")


@ordering_bp.route("/meal-plan", methods=["GET"])
def get_meal_plan():
    """식단 계획 조회

    Query params:
        startDate: 시작일 (기본: 오늘)
        endDate: 종료일 (기본: 시작일 + 7일)
    """
    today = date.today()
    start_raw = request.args.get("startDate")
    end_raw = request.args.get("endDate")
    start_date = parse_date(start_raw) if start_raw else today.isoformat()
    end_date = parse_date(end_raw) if end_raw else (today + timedelta(days=PLANNING_HORIZON_DAYS)).isoformat()
    if not start_date or not end_date:
        return _fail("날짜 형식이 올바르지 않습니다 (YYYY-MM-DD)", 400)
    if start_date > end_date:
        return _fail("시작일이 종료일보다 늦습니다", 400)

    try:
        meal_plan = _service().fetch_meal_plan(start_date, end_date)
        return _ok(as_list(meal_plan), startDate=start_date, endDate=end_date)
    except Exception as e:
        logger.error(f"식단 조회 실패: {e}", exc_info=True)
        return _fail("식단 조회에 실패했습니다")


@ordering_bp.route("/sales-stats", methods=["GET"])
def get_sales_stats():
    """요일별 판매 통계 (Query: weeks, 기본 4)"""
    try:
        weeks = _int_arg("weeks", _service().get_config().forecast_weeks)
    except ValueError:
        return _fail("weeks 값이 올바르지 않습니다", 400)

    try:
        stats = _service().calculate_sales_stats(weeks=weeks)
        return _ok(as_list(stats), weeks=weeks)
    except Exception as e:
        logger.error(f"판매 통계 조회 실패: {e}", exc_info=True)
        return _fail("판매 통계 조회에 실패했습니다")


@ordering_bp.route("/recipes", methods=["GET"])
def get_recipes():
    try:
        return _ok(as_list(_service().fetch_bom_lines()))
    except Exception as e:
        logger.error(f"레시피 조회 실패: {e}", exc_info=True)
        return _fail("레시피 조회에 실패했습니다")


@ordering_bp.route("/ingredients", methods=["GET"])
def get_ingredients():
    try:
        return _ok(as_list(_service().fetch_ingredient_master()))
    except Exception as e:
        logger.error(f"식자재 마스터 조회 실패: {e}", exc_info=True)
        return _fail("식자재 마스터 조회에 실패했습니다")


@ordering_bp.route("/inventory", methods=["GET"])
def get_inventory():
    try:
        return _ok(_service().fetch_current_inventory())
    except Exception as e:
        logger.error(f"재고 조회 실패: {e}", exc_info=True)
        return _fail("재고 조회에 실패했습니다")


@ordering_bp.route("/in-transit", methods=["GET"])
def get_in_transit():
    try:
        return _ok(_service().fetch_in_transit_orders())
    except Exception as e:
        logger.error(f"미입고 조회 실패: {e}", exc_info=True)
        return _fail("미입고 조회에 실패했습니다")


@ordering_bp.route("/config", methods=["GET"])
def get_config():
    return _ok(_service().get_config().to_dict())


@ordering_bp.route("/config", methods=["PUT"])
def update_config():
    """발주 설정 변경 (camelCase 본문, 서비스 수준 변경 시 Z-Score 자동 갱신)"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _fail("JSON 객체가 필요합니다", 400)

    try:
        config = _service().update_config(body)
    except (TypeError, ValueError) as e:
        return _fail(str(e), 400)
    return _ok(config.to_dict())


@ordering_bp.route("/simulate", methods=["POST"])
def simulate():
    """what-if 시뮬레이션 (저장된 설정은 변경하지 않음)

    Body:
        serviceLevel: 서비스 수준 (%)
        forecastWeeks: 예측 기간 (주)
        additionalDemand: {식자재코드: 추가 수요}
    """
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        return _fail("JSON 객체가 필요합니다", 400)

    additional_demand = body.get("additionalDemand") or {}
    if not isinstance(additional_demand, dict):
        return _fail("additionalDemand는 {식자재코드: 수량} 형식이어야 합니다", 400)

    try:
        recommendation, config = _service().simulate(
            service_level=body.get("serviceLevel"),
            forecast_weeks=body.get("forecastWeeks"),
            additional_demand={str(k): float(v) for k, v in additional_demand.items()},
        )
    except (TypeError, ValueError) as e:
        return _fail(str(e), 400)
    except Exception as e:
        logger.error(f"시뮬레이션 실패: {e}", exc_info=True)
        return _fail("시뮬레이션에 실패했습니다")

    return _ok(recommendation.to_dict(), config=config.to_dict())


@ordering_bp.route("/export", methods=["GET"])
def export_excel():
    """발주 권고 Excel 다운로드"""
    try:
        recommendation = _service().generate_recommendation()
        output = OrderExcelReport().to_bytes(recommendation)
    except Exception as e:
        logger.error(f"발주 권고 Excel 생성 실패: {e}", exc_info=True)
        return _fail("Excel 생성에 실패했습니다")

    filename = f"order_recommendation_{recommendation.order_date}.xlsx"
    return send_file(
        output,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        as_attachment=True,
        download_name=filename,
    )
