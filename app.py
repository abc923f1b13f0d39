import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from extensions import cors, limiter
from models import db
from services.errors import ServiceError

# .env 파일에서 환경변수 로드
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(BASE_DIR, '.env'))

from config import config_by_name

app = Flask(__name__)
# Nginx 프록시 뒤에서 HTTPS 관련 헤더 정보를 올바르게 처리하기 위해 적용
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

# 환경 설정 적용 (기본값 production)
env_name = os.environ.get('FLASK_ENV', 'production')
app_config = config_by_name[env_name]()
app.config.from_object(app_config)

# 로깅 설정 적용
LOG_DIR = os.path.join(BASE_DIR, 'logs')
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

from logging.config import dictConfig
dictConfig(app_config.get_logging_config(LOG_DIR))

logger = logging.getLogger(__name__)

# 초기화
db.init_app(app)
migrate = Migrate(app, db)
limiter.init_app(app)
cors.init_app(app, resources={r"/*": {"origins": app.config['FRONTEND_URL']}})

# Blueprint 중앙 등록
from routes import register_blueprints
register_blueprints(app)


@app.route('/health')
def health():
    try:
        db.session.execute(db.text('SELECT 1'))
        return jsonify({"status": "healthy", "database": "connected"}), 200
    except Exception as e:
        return jsonify({"status": "unhealthy", "database": str(e)}), 503

@app.after_request
def set_security_headers(response):
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    return response


@app.errorhandler(ServiceError)
def handle_service_error(e):
    if e.status_code >= 500:
        logger.error("%s: %s", type(e).__name__, e.message)
    return jsonify(e.to_dict()), e.status_code

@app.errorhandler(HTTPException)
def handle_http_error(e):
    return jsonify({"success": False, "message": e.description}), e.code

@app.errorhandler(500)
def internal_server_error(e):
    logger.exception("500 Internal Server Error: %s", e)
    return jsonify({"success": False, "message": "Server error."}), 500


# ── APScheduler 초기화 (알림 발송, 세션 점검) ──
from services.scheduler_service import init_scheduler
init_scheduler(app)


if __name__ == '__main__':
    # Nginx가 SSL을 처리하므로 Flask는 보통 5000 포트에서 실행됩니다
    use_debug = os.environ.get('FLASK_DEBUG', '0') == '1'
    app.run(host='127.0.0.1', port=5000, debug=use_debug)
