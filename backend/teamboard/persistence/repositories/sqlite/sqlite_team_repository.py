"""SQLite implementation of TeamRepository."""
from __future__ import annotations
import sqlite3
from typing import List, Optional

from teamboard.domain.common.ids import new_id, now_iso
from teamboard.domain.team.models import Team
from teamboard.domain.user.models import User
from teamboard.persistence.db import get_connection, is_unique_violation, transaction
from teamboard.persistence.interfaces.errors import DuplicateEntityError
from teamboard.persistence.interfaces.team_repository import TeamRepository
from teamboard.persistence.repositories.sqlite.sqlite_user_repository import row_to_user


def _row_to_team(row) -> Team:
    return Team(
        id=row["id"],
        name=row["name"],
        max_member_count=row["max_member_count"],
        owner_id=row["owner_id"],
        created_at=row["created_at"],
    )


class SqliteTeamRepository(TeamRepository):

    def create_with_owner(self, team: Team) -> Team:
        try:
            with transaction() as conn:
                conn.execute(
                    """
                    INSERT INTO teams (id, name, max_member_count, owner_id, created_at)
                    VALUES (:id, :name, :max_member_count, :owner_id, :created_at)
                    """,
                    {
                        "id": team.id,
                        "name": team.name,
                        "max_member_count": team.max_member_count,
                        "owner_id": team.owner_id,
                        "created_at": team.created_at,
                    },
                )
                conn.execute(
                    "INSERT INTO team_memberships (id, team_id, user_id, created_at) VALUES (?, ?, ?, ?)",
                    (new_id(), team.id, team.owner_id, now_iso()),
                )
        except sqlite3.IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntityError("team", str(e)) from e
            raise
        return team

    def get_by_id(self, team_id: str) -> Optional[Team]:
        conn = get_connection()
        row = conn.execute("SELECT * FROM teams WHERE id = ?", (team_id,)).fetchone()
        conn.close()
        return _row_to_team(row) if row else None

    def get_by_name(self, name: str) -> Optional[Team]:
        conn = get_connection()
        row = conn.execute("SELECT * FROM teams WHERE name = ?", (name,)).fetchone()
        conn.close()
        return _row_to_team(row) if row else None

    def list_all(self) -> List[Team]:
        conn = get_connection()
        rows = conn.execute("SELECT * FROM teams ORDER BY rowid ASC").fetchall()
        conn.close()
        return [_row_to_team(r) for r in rows]

    def update(self, team_id: str, name: Optional[str] = None, max_member_count: Optional[int] = None) -> Optional[Team]:
        changes = {}
        if name is not None:
            changes["name"] = name
        if max_member_count is not None:
            changes["max_member_count"] = max_member_count

        if changes:
            assignments = ", ".join(f"{column} = :{column}" for column in changes)
            conn = get_connection()
            try:
                conn.execute(f"UPDATE teams SET {assignments} WHERE id = :id", {**changes, "id": team_id})
                conn.commit()
            except sqlite3.IntegrityError as e:
                if is_unique_violation(e):
                    raise DuplicateEntityError("team", str(e)) from e
                raise
            finally:
                conn.close()
        return self.get_by_id(team_id)

    def delete_with_memberships(self, team_id: str) -> bool:
        with transaction() as conn:
            conn.execute("DELETE FROM team_requests WHERE team_id = ?", (team_id,))
            conn.execute("DELETE FROM team_memberships WHERE team_id = ?", (team_id,))
            cur = conn.execute("DELETE FROM teams WHERE id = ?", (team_id,))
        return cur.rowcount > 0

    def list_members(self, team_id: str) -> List[User]:
        conn = get_connection()
        rows = conn.execute(
            """
            SELECT u.* FROM team_memberships m
            JOIN users u ON u.id = m.user_id
            WHERE m.team_id = ?
            ORDER BY m.rowid ASC
            """,
            (team_id,),
        ).fetchall()
        conn.close()
        return [row_to_user(r) for r in rows]

    def count_members(self, team_id: str) -> int:
        conn = get_connection()
        row = conn.execute("SELECT COUNT(*) FROM team_memberships WHERE team_id = ?", (team_id,)).fetchone()
        conn.close()
        return row[0]

    def is_member(self, team_id: str, user_id: str) -> bool:
        conn = get_connection()
        row = conn.execute(
            "SELECT 1 FROM team_memberships WHERE team_id = ? AND user_id = ?",
            (team_id, user_id),
        ).fetchone()
        conn.close()
        return row is not None
