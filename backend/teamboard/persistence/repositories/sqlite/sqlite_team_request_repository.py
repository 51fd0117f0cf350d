"""SQLite implementation of TeamRequestRepository."""
from __future__ import annotations
import sqlite3
from typing import List, Optional, Tuple

from teamboard.domain.common.ids import new_id, now_iso
from teamboard.domain.team_request.models import TeamRequest
from teamboard.domain.user.models import User
from teamboard.persistence.db import get_connection, is_unique_violation, transaction
from teamboard.persistence.interfaces.errors import DuplicateEntityError, TeamFullError
from teamboard.persistence.interfaces.team_request_repository import TeamRequestRepository
from teamboard.persistence.repositories.sqlite.sqlite_user_repository import row_to_user


def _row_to_request(row) -> TeamRequest:
    return TeamRequest(
        id=row["id"],
        team_id=row["team_id"],
        user_id=row["user_id"],
        message=row["message"],
        created_at=row["created_at"],
    )


class SqliteTeamRequestRepository(TeamRequestRepository):

    def create(self, request: TeamRequest) -> TeamRequest:
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO team_requests (id, team_id, user_id, message, created_at)
                VALUES (:id, :team_id, :user_id, :message, :created_at)
                """,
                {
                    "id": request.id,
                    "team_id": request.team_id,
                    "user_id": request.user_id,
                    "message": request.message,
                    "created_at": request.created_at,
                },
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntityError("team request", str(e)) from e
            raise
        finally:
            conn.close()
        return request

    def find_first(self, team_id: str, user_id: str) -> Optional[TeamRequest]:
        conn = get_connection()
        row = conn.execute(
            "SELECT * FROM team_requests WHERE team_id = ? AND user_id = ? ORDER BY rowid ASC LIMIT 1",
            (team_id, user_id),
        ).fetchone()
        conn.close()
        return _row_to_request(row) if row else None

    def list_for_team(self, team_id: str) -> List[Tuple[TeamRequest, User]]:
        conn = get_connection()
        rows = conn.execute(
            """
            SELECT r.id AS request_id, r.team_id, r.user_id, r.message,
                   r.created_at AS request_created_at, u.*
            FROM team_requests r
            JOIN users u ON u.id = r.user_id
            WHERE r.team_id = ?
            ORDER BY r.rowid ASC
            """,
            (team_id,),
        ).fetchall()
        conn.close()
        return [
            (
                TeamRequest(
                    id=r["request_id"],
                    team_id=r["team_id"],
                    user_id=r["user_id"],
                    message=r["message"],
                    created_at=r["request_created_at"],
                ),
                row_to_user(r),
            )
            for r in rows
        ]

    def delete_many(self, team_id: str, user_id: str) -> int:
        conn = get_connection()
        cur = conn.execute(
            "DELETE FROM team_requests WHERE team_id = ? AND user_id = ?",
            (team_id, user_id),
        )
        conn.commit()
        conn.close()
        return cur.rowcount

    def accept(self, request: TeamRequest, max_member_count: int) -> bool:
        try:
            with transaction() as conn:
                # Counted under the write lock
                member_count = conn.execute(
                    "SELECT COUNT(*) FROM team_memberships WHERE team_id = ?",
                    (request.team_id,),
                ).fetchone()[0]
                if member_count >= max_member_count:
                    raise TeamFullError(request.team_id, max_member_count)
                cur = conn.execute("DELETE FROM team_requests WHERE id = ?", (request.id,))
                if cur.rowcount < 1:
                    return False
                conn.execute(
                    "INSERT INTO team_memberships (id, team_id, user_id, created_at) VALUES (?, ?, ?, ?)",
                    (new_id(), request.team_id, request.user_id, now_iso()),
                )
        except sqlite3.IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntityError("team membership", str(e)) from e
            raise
        return True
