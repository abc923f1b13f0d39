"""운영자 계정 관리 블루프린트 (superAdmin 전용)."""

import logging

from flask import Blueprint, g, jsonify, request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import User, db
from routes.utils import require_super_admin
from schemas import UserCreate, UserUpdate, parse_body
from services.auth_service import hash_password
from services.errors import ConflictError, ForbiddenError, NotFoundError, ServerError

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__, url_prefix="/admin/users")


def _get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found.")
    return user


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("User %s error: %s", action, exc, exc_info=True)
        raise ServerError("Server error.") from exc


@users_bp.route("", methods=["GET"])
@require_super_admin
def list_users():
    users = User.query.order_by(User.created_at.desc()).all()
    return jsonify([u.to_dict() for u in users])


@users_bp.route("", methods=["POST"])
@require_super_admin
def invite_user():
    data = parse_body(UserCreate, request.get_json(silent=True))
    email = str(data.email).lower()

    if User.query.filter_by(email=email).first():
        raise ConflictError("A user with this email already exists.")

    user = User(email=email, password_hash=hash_password(data.password), role=data.role)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError("A user with this email already exists.") from exc

    logger.info("User %s invited as %s by %s", email, data.role, g.current_user.email)
    return jsonify({"success": True, "user": user.to_dict()}), 201


@users_bp.route("/<int:user_id>", methods=["PATCH"])
@require_super_admin
def update_user(user_id):
    user = _get_user(user_id)
    if user.id == g.current_user.id:
        raise ForbiddenError("You cannot change your own role or status.")

    data = parse_body(UserUpdate, request.get_json(silent=True))
    if data.role is not None:
        user.role = data.role
    if data.is_active is not None:
        user.is_active = data.is_active
    _commit("update")

    logger.info("User %s updated by %s: role=%s active=%s",
                user.email, g.current_user.email, user.role, user.is_active)
    return jsonify({"success": True, "user": user.to_dict()})


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@require_super_admin
def delete_user(user_id):
    user = _get_user(user_id)
    if user.id == g.current_user.id:
        raise ForbiddenError("You cannot delete your own account.")

    db.session.delete(user)
    _commit("delete")
    logger.info("User %s deleted by %s", user.email, g.current_user.email)
    return jsonify({"success": True})
