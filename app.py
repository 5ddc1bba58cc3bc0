"""
산술화 Flask 앱
===============

설정 우선순위 (뒤가 앞을 덮어쓴다):
  1. 기본값 (ARITH_DEFAULT_MODULUS = bn128 곡선 위수)
  2. FLASK_ 접두사 환경 변수 (예: FLASK_ARITH_DEFAULT_MODULUS=97)
  3. create_app(config)에 넘긴 매핑 (테스트용)

실행:
    flask --app app run
"""

from flask import Flask

from arith.field import CURVE_ORDER

from arith_routes import arith_bp


def create_app(config=None):
    """Flask 앱을 만들고 arith 블루프린트를 등록한다."""
    app = Flask(__name__)
    app.config.from_mapping(
        ARITH_DEFAULT_MODULUS=CURVE_ORDER,
    )
    app.config.from_prefixed_env()
    if config is not None:
        app.config.from_mapping(config)

    app.register_blueprint(arith_bp)
    return app


app = create_app()
