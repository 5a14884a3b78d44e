from __future__ import annotations

import logging

from flask import Flask, g, jsonify, request

from ..common.decorators import make_token_required
from ..common.serialization import to_json
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..container import Container
from .service import parse_mark_request

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service)

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @token_required
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        try:
            mark = parse_mark_request(data)
            record = container.attendance_service.record_attendance(coach_id=g.coach.coach_id, request=mark)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except ConflictError as e:
            return jsonify({"error": str(e)}), 409
        except Exception:
            logger.exception("Mark attendance error")
            return jsonify({"error": "Internal server error"}), 500

        body = to_json(record.attendance)
        body["player"] = to_json(record.player)
        body["session"] = to_json(record.session)
        return jsonify(body)

    @app.route("/api/attendance/session/<int:session_id>", methods=["GET"], endpoint="session_attendance")
    @token_required
    def session_attendance(session_id: int):
        try:
            rows = container.attendance_service.get_session_attendance(coach_id=g.coach.coach_id, session_id=session_id)
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Get attendance error")
            return jsonify({"error": "Internal server error"}), 500

        out = []
        for r in rows:
            item = to_json(r.attendance)
            item["player"] = to_json(r.player)
            item["player"]["active_plan"] = to_json(r.active_plan)
            out.append(item)
        return jsonify(out)
