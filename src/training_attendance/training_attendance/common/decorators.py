from __future__ import annotations

from functools import wraps

from flask import g, jsonify, request

from ..core.exceptions import AuthenticationError


def bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def make_token_required(auth_service):
    """Build a view decorator that resolves the bearer token into ``g.coach``."""

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.coach = auth_service.resolve_token(bearer_token())
            except AuthenticationError as e:
                return jsonify({"error": str(e)}), 401
            return view(*args, **kwargs)

        return wrapper

    return token_required
