"""Dependency injection container: wires implementations to interfaces."""
from __future__ import annotations
from functools import lru_cache

from teamboard.application.auth_app_service import AuthAppService
from teamboard.application.team_app_service import TeamAppService
from teamboard.application.team_request_app_service import TeamRequestAppService
from teamboard.application.user_app_service import UserAppService
from teamboard.persistence.repositories.sqlite.sqlite_team_repository import SqliteTeamRepository
from teamboard.persistence.repositories.sqlite.sqlite_team_request_repository import SqliteTeamRequestRepository
from teamboard.persistence.repositories.sqlite.sqlite_user_repository import SqliteUserRepository


@lru_cache(maxsize=1)
def get_user_repo() -> SqliteUserRepository:
    return SqliteUserRepository()


@lru_cache(maxsize=1)
def get_team_repo() -> SqliteTeamRepository:
    return SqliteTeamRepository()


@lru_cache(maxsize=1)
def get_team_request_repo() -> SqliteTeamRequestRepository:
    return SqliteTeamRequestRepository()


@lru_cache(maxsize=1)
def get_user_app_service() -> UserAppService:
    return UserAppService(users=get_user_repo())


@lru_cache(maxsize=1)
def get_team_app_service() -> TeamAppService:
    return TeamAppService(
        teams=get_team_repo(),
        users=get_user_repo(),
        user_service=get_user_app_service(),
    )


@lru_cache(maxsize=1)
def get_team_request_app_service() -> TeamRequestAppService:
    return TeamRequestAppService(
        requests=get_team_request_repo(),
        teams=get_team_repo(),
        users=get_user_repo(),
    )


@lru_cache(maxsize=1)
def get_auth_app_service() -> AuthAppService:
    return AuthAppService(users=get_user_repo())
