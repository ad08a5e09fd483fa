"""WSGI entry point.

WSGI 서버 설정에서 이 파일을 import합니다:

    gunicorn wsgi:application

데이터 소스 위치는 .env(MEAL_PLAN_WORKBOOK_PATH, ERP_DB_PATH)에서 읽습니다.
"""

from src.web.app import create_app

application = create_app()
