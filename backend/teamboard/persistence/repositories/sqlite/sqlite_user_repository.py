"""SQLite implementation of UserRepository."""
from __future__ import annotations
import sqlite3
from typing import List, Optional

from teamboard.domain.user.models import User
from teamboard.persistence.db import get_connection, is_unique_violation
from teamboard.persistence.interfaces.errors import DuplicateEntityError
from teamboard.persistence.interfaces.user_repository import UserRepository


def row_to_user(row) -> User:
    return User(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        hashed_password=row["hashed_password"],
        score=row["score"],
        created_at=row["created_at"],
    )


class SqliteUserRepository(UserRepository):

    def create(self, user: User) -> User:
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO users (id, email, name, hashed_password, score, created_at)
                VALUES (:id, :email, :name, :hashed_password, :score, :created_at)
                """,
                {
                    "id": user.id,
                    "email": user.email,
                    "name": user.name,
                    "hashed_password": user.hashed_password,
                    "score": user.score,
                    "created_at": user.created_at,
                },
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntityError("user", str(e)) from e
            raise
        finally:
            conn.close()
        return user

    def _get_one(self, column: str, value: str) -> Optional[User]:
        conn = get_connection()
        row = conn.execute(f"SELECT * FROM users WHERE {column} = ?", (value,)).fetchone()
        conn.close()
        return row_to_user(row) if row else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._get_one("id", user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def get_by_name(self, name: str) -> Optional[User]:
        return self._get_one("name", name)

    def list_by_score(self) -> List[User]:
        conn = get_connection()
        rows = conn.execute("SELECT * FROM users ORDER BY score DESC, rowid ASC").fetchall()
        conn.close()
        return [row_to_user(r) for r in rows]

    def count_with_score_above(self, score: int) -> int:
        conn = get_connection()
        row = conn.execute("SELECT COUNT(*) FROM users WHERE score > ?", (score,)).fetchone()
        conn.close()
        return row[0]

    def team_names(self, user_id: str) -> List[str]:
        conn = get_connection()
        rows = conn.execute(
            """
            SELECT t.name FROM team_memberships m
            JOIN teams t ON t.id = m.team_id
            WHERE m.user_id = ?
            ORDER BY m.rowid ASC
            """,
            (user_id,),
        ).fetchall()
        conn.close()
        return [r["name"] for r in rows]
