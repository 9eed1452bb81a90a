from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from songlib.database.db_manager import db

logger = logging.getLogger(__name__)

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/healthz")
def healthz():
    status = 200
    checks = {}

    try:
        db.session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning("Health check database probe failed: %s", exc)
        status = 503
        checks["database"] = f"error: {exc.__class__.__name__}"

    detail_client = current_app.extensions.get("song_detail_client")
    checks["song_detail"] = "configured" if detail_client is not None else "unavailable"

    overall = "ok" if status == 200 else "degraded"
    return jsonify({"status": overall, "checks": checks}), status
