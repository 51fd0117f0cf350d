"""Shared pytest fixtures: a fresh SQLite file per test, repositories and services on top of it."""
from __future__ import annotations

import pytest

from teamboard.application.team_app_service import TeamAppService
from teamboard.application.team_request_app_service import TeamRequestAppService
from teamboard.application.user_app_service import UserAppService
from teamboard.core import config
from teamboard.domain.common.ids import new_id, now_iso
from teamboard.domain.user.models import User
from teamboard.persistence.db import init_db
from teamboard.persistence.repositories.sqlite.sqlite_team_repository import SqliteTeamRepository
from teamboard.persistence.repositories.sqlite.sqlite_team_request_repository import SqliteTeamRequestRepository
from teamboard.persistence.repositories.sqlite.sqlite_user_repository import SqliteUserRepository


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.records = []

    def _record(self, level, event, **kw):
        self.records.append({"level": level, "event": event, **kw})

    def error(self, event, **kw):
        self._record("error", event, **kw)

    def info(self, event, **kw):
        self._record("info", event, **kw)

    def errors(self):
        return [r for r in self.records if r["level"] == "error"]


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "teamboard.db"
    monkeypatch.setattr(config, "DATABASE_PATH", str(path))
    init_db()
    return path


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def user_repo(db_path):
    return SqliteUserRepository()


@pytest.fixture
def team_repo(db_path):
    return SqliteTeamRepository()


@pytest.fixture
def request_repo(db_path):
    return SqliteTeamRequestRepository()


@pytest.fixture
def user_service(user_repo, logger):
    return UserAppService(users=user_repo, logger=logger)


@pytest.fixture
def team_service(team_repo, user_repo, user_service, logger):
    return TeamAppService(teams=team_repo, users=user_repo, user_service=user_service, logger=logger)


@pytest.fixture
def request_service(request_repo, team_repo, user_repo, logger):
    return TeamRequestAppService(requests=request_repo, teams=team_repo, users=user_repo, logger=logger)


@pytest.fixture
def make_user(user_repo):
    """Insert a user straight into the store (no hashing), e.g. make_user("Alice", 50)."""
    def _make(name: str, score: int = 50, email: str | None = None) -> User:
        user = User(
            id=new_id(),
            email=email or f"{name.lower()}@example.com",
            name=name,
            hashed_password="not-a-real-hash",
            score=score,
            created_at=now_iso(),
        )
        return user_repo.create(user)
    return _make


def messages(result) -> list[str]:
    return [e.to_dict()["message"] for e in result.errors]


def codes(result) -> list[int]:
    return [e.to_dict()["code"] for e in result.errors]
