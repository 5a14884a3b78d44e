from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS, TOKEN_SALT
from ..core.exceptions import AuthenticationError, ValidationError
from .model import AgeGroup, Coach
from .repository import CoachRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What the login endpoint hands back to the client."""

    token: str
    coach: Coach
    age_groups: Sequence[AgeGroup]


class AuthService:
    """Use case: authenticate a coach and resolve bearer tokens."""

    def __init__(
        self,
        coaches: CoachRepository,
        *,
        secret_key: str,
        token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    ):
        self._coaches = coaches
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)
        self._token_max_age = int(token_max_age)

    def issue_token(self, coach: Coach) -> str:
        return self._serializer.dumps({"coach_id": coach.coach_id})

    def authenticate(self, username: str, password: str) -> LoginResult:
        try:
            username = require_non_empty(username, "username")
            password = require_non_empty(password, "password")
        except ValidationError:
            raise AuthenticationError("Invalid credentials")

        coach = self._coaches.get_by_username(username)
        if not coach:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(coach.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        logger.info("Coach %s logged in", coach.username)
        return LoginResult(
            token=self.issue_token(coach),
            coach=coach,
            age_groups=list(self._coaches.list_age_groups(coach.coach_id)),
        )

    def resolve_token(self, token: str | None) -> Coach:
        if not token:
            raise AuthenticationError("Access token required")

        try:
            payload = self._serializer.loads(token, max_age=self._token_max_age)
        except SignatureExpired:
            raise AuthenticationError("Token expired")
        except BadSignature:
            raise AuthenticationError("Invalid token")

        coach_id = payload.get("coach_id") if isinstance(payload, dict) else None
        coach = self._coaches.get_by_id(int(coach_id)) if coach_id is not None else None
        if not coach:
            raise AuthenticationError("Invalid token")
        return coach
