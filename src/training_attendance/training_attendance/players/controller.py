from __future__ import annotations

import logging

from flask import Flask, g, jsonify

from ..common.decorators import make_token_required
from ..common.serialization import to_json
from ..core.exceptions import NotFoundError
from ..container import Container
from .service import PlayerProfile

logger = logging.getLogger(__name__)


def _profile_json(profile: PlayerProfile) -> dict:
    body = to_json(profile.player)
    body["age_group"] = to_json(profile.age_group)
    body["active_plan"] = to_json(profile.active_plan)
    body["attendances"] = [
        dict(to_json(row.attendance), session=to_json(row.session)) for row in profile.attendances
    ]
    body["statistics"] = to_json(profile.statistics)
    return body


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service)

    @app.route("/api/players", methods=["GET"], endpoint="players_list")
    @token_required
    def players_list():
        try:
            profiles = container.player_service.list_players_with_statistics(coach_id=g.coach.coach_id)
        except Exception:
            logger.exception("Get players error")
            return jsonify({"error": "Internal server error"}), 500
        return jsonify([_profile_json(p) for p in profiles])

    @app.route("/api/players/<int:player_id>", methods=["GET"], endpoint="player_detail")
    @token_required
    def player_detail(player_id: int):
        try:
            profile = container.player_service.get_player_with_statistics(
                coach_id=g.coach.coach_id, player_id=player_id
            )
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Get player error")
            return jsonify({"error": "Internal server error"}), 500
        return jsonify(_profile_json(profile))
