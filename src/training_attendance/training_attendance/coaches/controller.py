from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.serialization import to_json
from ..common.validators import require_object
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            data = require_object(data)
            result = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"error": str(e)}), 401
        except Exception:
            logger.exception("Login error")
            return jsonify({"error": "Internal server error"}), 500

        coach = to_json(result.coach)
        coach["age_groups"] = to_json(list(result.age_groups))
        return jsonify({"token": result.token, "coach": coach})
