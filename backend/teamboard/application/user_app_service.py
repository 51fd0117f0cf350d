"""Application service: user lookup and leaderboard ranking."""
from __future__ import annotations
from typing import List, Optional

from teamboard.application.base import AppService
from teamboard.domain.common.result import Result
from teamboard.domain.user.models import User
from teamboard.persistence.interfaces.user_repository import UserRepository


class UserAppService(AppService):
    def __init__(self, users: UserRepository, logger=None):
        super().__init__(logger)
        self._users = users

    def get_user(self, email: Optional[str] = None, name: Optional[str] = None) -> Result[dict]:
        """Look a user up by email (preferred when both are given) or by name."""
        query_is_valid = self._fail_if(not email and not name, "Email or name must be provided.")
        if query_is_valid.is_error:
            return Result.fail(query_is_valid)

        user = self._users.get_by_email(email) if email else self._users.get_by_name(name)
        user_exists = self._fail_if(user is None, "User does not exist.", 404)
        if user_exists.is_error:
            return Result.fail(user_exists)

        return Result.ok(self.map_to_user_dto(user, include_teams=True))

    def get_all_users(self) -> Result[List[dict]]:
        users = self._users.list_by_score()
        return Result.ok([
            self.map_to_user_dto(user, include_teams=True, index=index)
            for index, user in enumerate(users)
        ])

    def map_to_user_dto(self, user: User, include_teams: bool = False, index: Optional[int] = None) -> dict:
        """
        ``{rank, name, score, team?}``.

        With ``index`` (position in a score-descending listing) the rank is ``index + 1``.
        Without it the rank costs one extra store query: users with a strictly higher score, plus one.
        ``include_teams`` costs another query for the team names.
        """
        if index is None:
            rank = self._users.count_with_score_above(user.score) + 1
        else:
            rank = index + 1

        dto = {
            "rank": rank,
            "name": user.name,
            "score": user.score,
        }
        if include_teams:
            dto["team"] = self._users.team_names(user.id)
        return dto
