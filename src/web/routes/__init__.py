"""라우트 Blueprint 등록"""
from flask import Flask


def register_blueprints(app: Flask):
    from .api_ordering import ordering_bp

    app.register_blueprint(ordering_bp, url_prefix="/api/ordering")
