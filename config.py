import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_int(name, default):
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name, default):
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    """기본 설정 (모든 환경 공통)"""
    SECRET_KEY = os.environ.get('SECRET_KEY')
    JWT_SECRET = os.environ.get('JWT_SECRET') or os.environ.get('SECRET_KEY')
    JWT_EXPIRES_SECONDS = _env_int('JWT_EXPIRES_SECONDS', 24 * 60 * 60)  # 1일
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # 환경변수 DATABASE_URL이 있으면 사용, 없으면 로컬 SQLite
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f"sqlite:///{os.path.join(BASE_DIR, 'starpublicity.db')}"
    )
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # JSON 요청만 받으므로 2MB

    # 프론트엔드(SPA) 오리진 - CORS 허용 대상
    FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:5173')

    # ── 로그인 보호 ──
    LOGIN_MAX_ATTEMPTS = _env_int('LOGIN_MAX_ATTEMPTS', 5)
    LOGIN_BLOCK_SECONDS = _env_int('LOGIN_BLOCK_SECONDS', 300)

    # ── Rate limit (flask-limiter) ──
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', '1') == '1'
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    PUBLIC_FORM_LIMIT = os.environ.get('PUBLIC_FORM_LIMIT', '10 per minute')

    # ── 알림 채널 ──
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL')
    INQUIRY_RECEIVER_PHONE = os.environ.get('INQUIRY_RECEIVER_PHONE')
    SMTP_HOST = os.environ.get('SMTP_HOST', 'smtp.gmail.com')
    SMTP_PORT = _env_int('SMTP_PORT', 465)
    SMTP_TIMEOUT = _env_float('SMTP_TIMEOUT', 10.0)  # 초
    SMTP_USER = os.environ.get('SMTP_USER')
    SMTP_PASS = os.environ.get('SMTP_PASS')
    MAIL_FROM = os.environ.get('MAIL_FROM') or os.environ.get('SMTP_USER')

    # WhatsApp Web 게이트웨이 (QR 스캔으로 인증된 세션)
    WHATSAPP_GATEWAY_URL = os.environ.get('WHATSAPP_GATEWAY_URL')
    WHATSAPP_API_KEY = os.environ.get('WHATSAPP_API_KEY')
    WHATSAPP_SESSION = os.environ.get('WHATSAPP_SESSION', 'default')
    DEFAULT_COUNTRY_CODE = os.environ.get('DEFAULT_COUNTRY_CODE', '91')
    MESSAGING_READY_TIMEOUT = _env_float('MESSAGING_READY_TIMEOUT', 30.0)  # 초
    MESSAGING_POLL_INTERVAL = _env_float('MESSAGING_POLL_INTERVAL', 1.0)   # 초
    MESSAGING_HEALTH_INTERVAL = _env_int('MESSAGING_HEALTH_INTERVAL', 300)  # 초

    # 고객 접수확인 메시지에 들어가는 회사 정보
    COMPANY_NAME = os.environ.get('COMPANY_NAME', 'Star Publicity')
    SUPPORT_PHONE = os.environ.get('SUPPORT_PHONE', '91+8839728739')

    # 로깅 설정
    @staticmethod
    def get_logging_config(log_dir):
        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
                }
            },
            'handlers': {
                'file': {
                    'class': 'logging.handlers.RotatingFileHandler',
                    'filename': os.path.join(log_dir, 'starpublicity.log'),
                    'maxBytes': 1024 * 1024 * 10, # 10MB
                    'backupCount': 5,
                    'formatter': 'default',
                    'encoding': 'utf-8'
                },
                'console': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'default'
                }
            },
            'root': {
                'level': 'INFO',
                'handlers': ['file', 'console']
            }
        }

class DevelopmentConfig(Config):
    """개발 환경 설정"""
    DEBUG = True
    JWT_SECRET = Config.JWT_SECRET or 'dev-jwt-secret'

class ProductionConfig(Config):
    """운영 환경 설정"""
    DEBUG = False

    # 운영 환경 필수값 검증
    def __init__(self):
        if not self.SECRET_KEY:
            raise RuntimeError("SECRET_KEY environment variable is not set")
        if not self.JWT_SECRET:
            raise RuntimeError("JWT_SECRET environment variable is not set")

# 환경 변수에 따라 설정 클래스 선택
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
