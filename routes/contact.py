"""문의 블루프린트 - 퍼블릭 접수 + 관리자 조회/처리."""

import logging

from flask import Blueprint, current_app, jsonify, request, send_file

from extensions import limiter
from routes.utils import require_admin
from services import console_service, inquiry_service
from services.errors import ValidationError
from services.excel_service import build_inquiries_workbook

logger = logging.getLogger(__name__)

contact_bp = Blueprint("contact", __name__, url_prefix="/contact")


def _public_form_limit():
    return current_app.config.get("PUBLIC_FORM_LIMIT", "10 per minute")


def _view_args():
    """목록 조회 파라미터 (status / q / sort)."""
    status_filter = request.args.get("status", "all")
    sort_by = request.args.get("sort", "latest")
    if status_filter not in console_service.STATUS_FILTERS:
        raise ValidationError("status must be one of: all, read, unread")
    if sort_by not in console_service.SORT_OPTIONS:
        raise ValidationError("sort must be one of: latest, oldest, name")
    return status_filter, request.args.get("q", ""), sort_by


# ── 퍼블릭 ──


@contact_bp.route("/inquiry", methods=["POST"])
@limiter.limit(_public_form_limit)
def submit_inquiry():
    inquiry = inquiry_service.submit(request.get_json(silent=True))
    return jsonify({
        "success": True,
        "message": "Inquiry submitted successfully!",
        "data": inquiry.to_dict(),
    }), 201


# ── 관리자 ──


@contact_bp.route("/inquiries")
@require_admin
def list_inquiries():
    status_filter, term, sort_by = _view_args()
    rows = console_service.build_inquiry_view(
        inquiry_service.list_inquiries(), status_filter, term, sort_by
    )
    return jsonify(rows)


@contact_bp.route("/inquiries/export")
@require_admin
def export_inquiries():
    status_filter, term, sort_by = _view_args()
    rows = console_service.build_inquiry_view(
        inquiry_service.list_inquiries(), status_filter, term, sort_by
    )
    logger.info("Inquiry excel export requested (%d rows)", len(rows))
    return send_file(
        build_inquiries_workbook(rows),
        as_attachment=True,
        download_name="ContactInquiries.xlsx",
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


@contact_bp.route("/inquiries/<inquiry_id>")
@require_admin
def view_inquiry(inquiry_id):
    return jsonify(inquiry_service.view(inquiry_id).to_dict())


@contact_bp.route("/inquiries/<inquiry_id>/status", methods=["PATCH"])
@require_admin
def update_inquiry_status(inquiry_id):
    inquiry = inquiry_service.update_status(inquiry_id, request.get_json(silent=True))
    return jsonify(inquiry.to_dict())


@contact_bp.route("/inquiries/<inquiry_id>/notes", methods=["POST"])
@require_admin
def add_inquiry_note(inquiry_id):
    inquiry = inquiry_service.add_note(inquiry_id, request.get_json(silent=True))
    return jsonify(inquiry.to_dict())


@contact_bp.route("/inquiries/<inquiry_id>/forward", methods=["POST"])
@require_admin
def forward_inquiry(inquiry_id):
    to = inquiry_service.forward(inquiry_id, request.get_json(silent=True))
    return jsonify({"success": True, "message": f"Inquiry forwarded to {to}"})
