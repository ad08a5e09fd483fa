"""Flask 앱 생성"""
import sys
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

from src.settings.app_config import PROJECT_ROOT, WEB_HOST, WEB_PORT
from src.utils.logger import get_logger

logger = get_logger(__name__)

# PROJECT_ROOT가 sys.path에 있어야 from src.xxx import 가능
_root_path = str(PROJECT_ROOT)
if _root_path not in sys.path:
    sys.path.insert(0, _root_path)


def create_app(service=None, config: Optional[dict] = None) -> Flask:
    """Flask 앱 팩토리

    Args:
        service: StatisticalOrderingService (None이면 .env 기반 기본 소스로 생성)
        config: app.config 덮어쓰기 (테스트용)
    """
    app = Flask(__name__)
    app.config["PROJECT_ROOT"] = str(PROJECT_ROOT)
    if config:
        app.config.update(config)

    if service is None:
        from src.application.services.ordering_service import (
            StatisticalOrderingService,
            build_default_source,
        )
        service = StatisticalOrderingService(source=build_default_source())
    app.config["ORDERING_SERVICE"] = service

    from .routes import register_blueprints
    register_blueprints(app)

    from src.web.middleware import RateLimiter
    rate_limiter = RateLimiter(
        default_limit=app.config.get("RATE_LIMIT_DEFAULT", 60),
        window_seconds=app.config.get("RATE_LIMIT_WINDOW", 60),
    )
    app.extensions["rate_limiter"] = rate_limiter

    @app.before_request
    def check_rate_limit():
        """Rate Limiting 체크"""
        result = rate_limiter.check()
        if result is not None:
            return result

    @app.before_request
    def log_request():
        """접근 로깅"""
        logger.info(f"[API] {request.method} {request.path} from {request.remote_addr}")

    @app.after_request
    def add_security_headers(response):
        """보안 헤더 추가"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        return response

    # 전역 에러 핸들러 (일관된 JSON 응답)
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"success": False, "error": "요청한 리소스를 찾을 수 없습니다", "code": "NOT_FOUND"}), 404

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({"success": False, "error": "서버 내부 오류가 발생했습니다", "code": "INTERNAL_ERROR"}), 500

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"success": False, "error": "잘못된 요청입니다", "code": "BAD_REQUEST"}), 400

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"success": False, "error": "허용되지 않는 HTTP 메서드입니다", "code": "METHOD_NOT_ALLOWED"}), 405

    return app


if __name__ == "__main__":
    app = create_app()
    print(f"Meal Ordering API starting on http://{WEB_HOST}:{WEB_PORT}")
    app.run(host=WEB_HOST, port=WEB_PORT, debug=False)
