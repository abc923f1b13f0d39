"""관리자 인증 서비스 - 비밀번호 해시, 토큰 발급/검증, 로그인 시도 제한."""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models import LoginAttempt, User, db
from services.errors import AuthError, TooManyAttemptsError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, stored: str) -> bool:
    """bcrypt 해시 비교. 해시 형식이 아니면 실패."""
    if not plain or not stored:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        return False


def issue_token(user: User) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(seconds=int(current_app.config.get("JWT_EXPIRES_SECONDS", 86400))),
    }
    return jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            current_app.config["JWT_SECRET"],
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.PyJWTError as e:
        raise AuthError("Invalid token") from e


def user_from_token(token: str) -> User:
    claims = decode_token(token)
    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError) as e:
        raise AuthError("Invalid token") from e
    user = db.session.get(User, user_id)
    if not user:
        raise AuthError("Invalid token")
    return user


# ── 로그인 시도 제한 ──


def _recent_attempt_count(ip: str, block_seconds: int) -> int:
    cutoff = datetime.now() - timedelta(seconds=block_seconds)
    return LoginAttempt.query.filter(
        LoginAttempt.ip == ip,
        LoginAttempt.created_at >= cutoff,
    ).count()


def _clear_attempts(ip: str) -> None:
    LoginAttempt.query.filter(LoginAttempt.ip == ip).delete()


def _purge_expired_attempts(block_seconds: int) -> None:
    """만료된 로그인 시도 레코드 전체 정리 (DB 무한 증가 방지)"""
    cutoff = datetime.now() - timedelta(seconds=block_seconds)
    LoginAttempt.query.filter(LoginAttempt.created_at < cutoff).delete()


def _safe_commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning("Login attempt bookkeeping failed: %s", e)


def login(email: str, password: str, ip: str):
    """이메일/비밀번호 로그인. 성공 시 (user, token)."""
    cfg = current_app.config
    max_attempts = int(cfg.get("LOGIN_MAX_ATTEMPTS", 5))
    block_seconds = int(cfg.get("LOGIN_BLOCK_SECONDS", 300))

    _purge_expired_attempts(block_seconds)
    _safe_commit()

    if _recent_attempt_count(ip, block_seconds) >= max_attempts:
        logger.warning("Login blocked for IP %s due to too many failed attempts", ip)
        raise TooManyAttemptsError()

    user = User.query.filter_by(email=email.strip().lower()).first()
    if user and user.is_active and verify_password(password, user.password_hash):
        _clear_attempts(ip)
        _safe_commit()
        logger.info("Admin login success: %s from %s", user.email, ip)
        return user, issue_token(user)

    db.session.add(LoginAttempt(ip=ip, email=email[:120]))
    _safe_commit()
    if user and not user.is_active:
        logger.warning("Suspended account login attempt: %s from %s", email, ip)
    else:
        logger.warning("Admin login failed: %s from %s", email, ip)
    raise AuthError("Invalid credentials")
