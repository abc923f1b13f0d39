from functools import wraps

from flask import g, request

from services.auth_service import user_from_token
from services.errors import AuthError, ForbiddenError


def client_ip() -> str:
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _bearer_token():
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# ── 인증 데코레이터 ──
def require_admin(f):
    """Bearer 토큰 인증 데코레이터.

    토큰 없음/무효: 401, 정지된 계정: 403
    인증된 사용자는 g.current_user 로 접근한다.
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if not token:
            raise AuthError("No token provided")
        user = user_from_token(token)
        if not user.is_active:
            raise ForbiddenError("Account is suspended")
        g.current_user = user
        return f(*args, **kwargs)

    return decorated_function


def require_super_admin(f):
    """superAdmin 전용 (require_admin 포함)."""

    @wraps(f)
    @require_admin
    def decorated_function(*args, **kwargs):
        if not g.current_user.is_super_admin:
            raise ForbiddenError("Access denied. Super admin rights required.")
        return f(*args, **kwargs)

    return decorated_function
