import logging

from flask import Blueprint, g, jsonify, request

from extensions import limiter
from routes.utils import client_ip, require_admin
from schemas import LoginRequest, parse_body
from services import auth_service

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("20 per minute")
def login():
    creds = parse_body(LoginRequest, request.get_json(silent=True))
    user, token = auth_service.login(creds.email, creds.password, client_ip())
    return jsonify({"token": token, "role": user.role, "email": user.email})


@auth_bp.route("/me")
@require_admin
def me():
    return jsonify(g.current_user.to_dict())
