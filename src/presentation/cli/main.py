"""
CLI 진입점 -- 발주 권고 명령 디스패처

Usage:
    python -m src.presentation.cli.main recommend --service-level 99 --excel
    python -m src.presentation.cli.main recommend --workbook data/meal_plan.xlsx --json
    python -m src.presentation.cli.main stats --weeks 6
    python -m src.presentation.cli.main config
    python -m src.presentation.cli.main serve --port 8080
"""

import argparse
import json
import sys

from src.utils.logger import get_logger

logger = get_logger(__name__)

STATUS_MARKS = {
    "shortage": "부족",
    "urgent": "긴급",
    "overstock": "과재고",
    "normal": "정상",
}


def create_parser() -> argparse.ArgumentParser:
    """CLI 파서 생성"""
    parser = argparse.ArgumentParser(
        prog="meal-ordering",
        description="단체급식 통계적 발주 권고 CLI",
    )

    subparsers = parser.add_subparsers(dest="command", help="명령")

    # recommend 명령
    recommend_parser = subparsers.add_parser("recommend", help="발주 권고 생성")
    recommend_parser.add_argument("--workbook", type=str, default=None, help="식단/레시피 워크북 경로")
    recommend_parser.add_argument("--erp-db", type=str, default=None, help="ERP 재고 DB 경로")
    recommend_parser.add_argument("--service-level", type=float, default=None, help="서비스 수준 (%%)")
    recommend_parser.add_argument("--weeks", type=int, default=None, help="예측 기간 (주)")
    recommend_parser.add_argument("--json", action="store_true", help="JSON 출력")
    recommend_parser.add_argument("--excel", action="store_true", help="엑셀 리포트 저장")

    # stats 명령
    stats_parser = subparsers.add_parser("stats", help="요일별 판매 통계")
    stats_parser.add_argument("--workbook", type=str, default=None, help="식단/레시피 워크북 경로")
    stats_parser.add_argument("--weeks", type=int, default=None, help="분석 기간 (주)")

    # config 명령
    subparsers.add_parser("config", help="현재 발주 설정 출력")

    # serve 명령
    serve_parser = subparsers.add_parser("serve", help="웹 API 서버 실행 (waitress)")
    serve_parser.add_argument("--host", type=str, default=None, help="바인딩 호스트 (기본: WEB_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="포트 번호 (기본: WEB_PORT)")
    serve_parser.add_argument("--threads", type=int, default=4, help="워커 스레드 수")

    return parser


def _build_service(args):
    from src.application.services.ordering_service import (
        StatisticalOrderingService,
        build_default_source,
    )
    source = build_default_source(
        workbook_path=getattr(args, "workbook", None),
        erp_db_path=getattr(args, "erp_db", None),
    )
    return StatisticalOrderingService(source=source)


def cmd_recommend(args):
    """발주 권고 명령 실행"""
    service = _build_service(args)
    config = service.get_config().updated(service_level=args.service_level, forecast_weeks=args.weeks)
    recommendation = service.generate_recommendation(config=config)

    if recommendation.inputs_empty:
        print("경고: 입력 데이터가 모두 비어 있습니다. 워크북/ERP 경로를 확인하세요.", file=sys.stderr)
    elif recommendation.source_errors:
        print(f"경고: 조회 실패 소스 {', '.join(recommendation.source_errors)}", file=sys.stderr)

    if args.json:
        print(json.dumps(recommendation.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(f"발주 권고 ({recommendation.target_period_start} ~ {recommendation.target_period_end})")
        print(f"  서비스 수준 {config.service_level:g}% (Z={config.z_score}), 예측 {config.forecast_weeks}주")
        for item in recommendation.items:
            mark = STATUS_MARKS.get(item.status, item.status)
            print(f"  [{mark:4s}] {item.ingredient_name[:20]:20s} "
                  f"발주 {item.order_qty:>6,}{item.unit}  재고 {item.days_of_stock}일  {item.status_message}")
        print(f"품목 {recommendation.total_items}개 (부족 {recommendation.shortage_items}, "
              f"긴급 {recommendation.urgent_items}), 예상금액 {recommendation.total_estimated_cost:,}원")

    if args.excel:
        from src.report.order_excel_report import OrderExcelReport
        path = OrderExcelReport().generate(recommendation)
        print(f"엑셀 저장: {path}")
    return recommendation


def cmd_stats(args):
    """판매 통계 명령 실행"""
    service = _build_service(args)
    stats = service.calculate_sales_stats(weeks=args.weeks)
    print(f"요일별 판매 통계: {len(stats)}건")
    for s in stats:
        print(f"  {s.menu_name[:20]:20s} {s.weekday} 평균 {s.avg_sales} 표준편차 {s.std_dev} ({s.sample_count}회)")
    return stats


def cmd_config(args):
    """현재 설정 출력 (.env 반영)"""
    from src.settings.ordering_config import OrderingConfig

    config = OrderingConfig.from_env()
    print(json.dumps(config.to_dict(), ensure_ascii=False, indent=2))
    return config


def cmd_serve(args):
    """웹 API 서버 실행"""
    from waitress import serve

    from src.settings.app_config import WEB_HOST, WEB_PORT
    from src.web.app import create_app

    host = args.host or WEB_HOST
    port = args.port or WEB_PORT
    app = create_app()

    print(f"Meal Ordering API starting on http://{host}:{port}")
    print("  Ctrl+C to stop")
    try:
        serve(app, host=host, port=port, threads=args.threads)
    except KeyboardInterrupt:
        print("\nServer stopped.")


def main(argv=None):
    """CLI 메인 진입점"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    commands = {
        "recommend": cmd_recommend,
        "stats": cmd_stats,
        "config": cmd_config,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        try:
            return handler(args)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"[CLI] {args.command} 실패: {e}")
            print(f"오류: {e}", file=sys.stderr)
            sys.exit(1)
    parser.print_help()


if __name__ == "__main__":
    main()
