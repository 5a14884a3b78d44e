from __future__ import annotations

import logging

from flask import Flask, g, jsonify, request

from ..common.decorators import make_token_required
from ..common.serialization import to_json
from ..common.validators import require_enum, require_object
from ..core.enums import SessionStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .service import SessionOverview

logger = logging.getLogger(__name__)


def _overview_json(ov: SessionOverview) -> dict:
    body = to_json(ov.session)
    age_group = to_json(ov.age_group) or {}
    age_group["players"] = [
        dict(to_json(entry.player), active_plan=to_json(entry.active_plan)) for entry in ov.players
    ]
    body["age_group"] = age_group
    body["attendances"] = [
        dict(to_json(row.attendance), player=to_json(row.player)) for row in ov.attendances
    ]
    return body


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service)

    @app.route("/api/sessions/today", methods=["GET"], endpoint="sessions_today")
    @token_required
    def sessions_today():
        try:
            overviews = container.session_service.list_today(coach_id=g.coach.coach_id)
        except Exception:
            logger.exception("Get sessions error")
            return jsonify({"error": "Internal server error"}), 500
        return jsonify([_overview_json(ov) for ov in overviews])

    @app.route("/api/sessions/<int:session_id>", methods=["GET"], endpoint="session_detail")
    @token_required
    def session_detail(session_id: int):
        try:
            ov = container.session_service.get_overview(coach_id=g.coach.coach_id, session_id=session_id)
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Get session error")
            return jsonify({"error": "Internal server error"}), 500
        return jsonify(_overview_json(ov))

    @app.route("/api/sessions/<int:session_id>/status", methods=["PATCH"], endpoint="session_status")
    @token_required
    def session_status(session_id: int):
        data = request.get_json(silent=True) or {}
        try:
            status = require_enum(require_object(data).get("status"), SessionStatus, "status")
            session = container.session_service.update_status(
                coach_id=g.coach.coach_id, session_id=session_id, status=status
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Update session status error")
            return jsonify({"error": "Internal server error"}), 500
        return jsonify(to_json(session))

    @app.route("/api/sessions/<int:session_id>/photo", methods=["PATCH"], endpoint="session_photo")
    @token_required
    def session_photo(session_id: int):
        data = request.get_json(silent=True) or {}
        try:
            photo = require_object(data).get("photo")
            if photo is not None and not isinstance(photo, str):
                raise ValidationError("photo must be a string")
            session = container.session_service.upload_group_photo(
                coach_id=g.coach.coach_id, session_id=session_id, photo=photo
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Upload photo error")
            return jsonify({"error": "Internal server error"}), 500
        return jsonify(to_json(session))
