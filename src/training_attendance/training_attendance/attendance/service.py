from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..common.validators import require_enum, require_int, require_object
from ..core.constants import CONFLICT_RETRIES
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..players.repository import PlayerRepository
from ..sessions.service import SessionService
from .model import AttendanceRecord, SessionAttendanceRow
from .reconciler import AttendanceQuotaReconciler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkRequest:
    player_id: int
    session_id: int
    status: AttendanceStatus
    is_complimentary: bool
    photo: Optional[str] = None
    notes: Optional[str] = None


def parse_mark_request(data: Any) -> MarkRequest:
    """Validate a raw request body (camelCase keys as sent by the client)."""

    data = require_object(data)
    is_complimentary = data.get("isComplimentary", False)
    if is_complimentary is None:
        is_complimentary = False
    if not isinstance(is_complimentary, bool):
        raise ValidationError("isComplimentary must be a boolean")

    photo = data.get("photo")
    notes = data.get("notes")
    if photo is not None and not isinstance(photo, str):
        raise ValidationError("photo must be a string")
    if notes is not None and not isinstance(notes, str):
        raise ValidationError("notes must be a string")

    return MarkRequest(
        player_id=require_int(data.get("playerId"), "playerId"),
        session_id=require_int(data.get("sessionId"), "sessionId"),
        status=require_enum(data.get("status"), AttendanceStatus, "status"),
        is_complimentary=is_complimentary,
        photo=photo,
        notes=notes,
    )


class AttendanceService:
    """Use case: coach marks attendance for a session they own."""

    def __init__(
        self,
        reconciler: AttendanceQuotaReconciler,
        sessions: SessionService,
        players: PlayerRepository,
        *,
        conflict_retries: int = CONFLICT_RETRIES,
    ):
        self._reconciler = reconciler
        self._sessions = sessions
        self._players = players
        self._conflict_retries = int(conflict_retries)

    def record_attendance(self, *, coach_id: int, request: MarkRequest) -> AttendanceRecord:
        self._sessions.require_in_scope(coach_id=coach_id, session_id=request.session_id)
        if not self._players.get_for_coach(coach_id=coach_id, player_id=request.player_id):
            raise NotFoundError("Player not found")

        attempt = 0
        while True:
            try:
                return self._reconciler.record_attendance(
                    player_id=request.player_id,
                    session_id=request.session_id,
                    status=request.status,
                    is_complimentary=request.is_complimentary,
                    photo=request.photo,
                    notes=request.notes,
                )
            except ConflictError:
                if attempt >= self._conflict_retries:
                    raise
                attempt += 1
                logger.warning(
                    "Conflict marking player=%s session=%s; retry %d/%d",
                    request.player_id,
                    request.session_id,
                    attempt,
                    self._conflict_retries,
                )

    def get_session_attendance(self, *, coach_id: int, session_id: int) -> Sequence[SessionAttendanceRow]:
        session = self._sessions.require_in_scope(coach_id=coach_id, session_id=session_id)
        return self._reconciler.get_attendance_for_session(session.session_id)
