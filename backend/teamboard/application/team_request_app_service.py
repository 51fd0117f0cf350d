"""Application service: join-request lifecycle: create, accept (becomes a membership), delete."""
from __future__ import annotations
from typing import List, Optional

from teamboard.application.base import AppService
from teamboard.domain.common.ids import new_id, now_iso
from teamboard.domain.common.result import Result
from teamboard.domain.team.models import Team
from teamboard.domain.team.rules import validate_capacity, validate_ownership
from teamboard.domain.team_request.models import TeamRequest
from teamboard.domain.team_request.rules import validate_new_request
from teamboard.domain.user.models import User
from teamboard.persistence.interfaces.errors import DuplicateEntityError, TeamFullError
from teamboard.persistence.interfaces.team_repository import TeamRepository
from teamboard.persistence.interfaces.team_request_repository import TeamRequestRepository
from teamboard.persistence.interfaces.user_repository import UserRepository


class TeamRequestAppService(AppService):
    def __init__(
        self,
        requests: TeamRequestRepository,
        teams: TeamRepository,
        users: UserRepository,
        logger=None,
    ):
        super().__init__(logger)
        self._requests = requests
        self._teams = teams
        self._users = users

    # ------------------------------------------------------------------
    # CREATE
    # ------------------------------------------------------------------
    def create_team_request(self, email: Optional[str], team_name: Optional[str], message: Optional[str] = "") -> Result[None]:
        """Ask to join ``team_name`` on behalf of ``email``. Capacity is checked on acceptance, not here."""
        params_are_valid = self._fail_if(not email or not team_name, "User and team name must be provided.")
        if params_are_valid.is_error:
            return Result.fail(params_are_valid)

        user = self._users.get_by_email(email)
        team = self._teams.get_by_name(team_name)
        existence = Result.merge([
            self._fail_if(user is None, "User does not exist.", 404),
            self._fail_if(team is None, "Team does not exist.", 404),
        ])
        if existence.is_error:
            return Result.fail(existence)

        uniqueness = validate_new_request(
            is_member=self._teams.is_member(team.id, user.id),
            request_exists=self._requests.find_first(team.id, user.id) is not None,
            logger=self._log,
        )
        if uniqueness.is_error:
            return Result.fail(uniqueness)

        try:
            self._requests.create(TeamRequest(
                id=new_id(),
                team_id=team.id,
                user_id=user.id,
                message=message or "",
                created_at=now_iso(),
            ))
        except DuplicateEntityError as e:
            return Result.fail(self._fail_if(True, "Team request already exists.", 409, cause=e))

        return Result.ok()

    # ------------------------------------------------------------------
    # ACCEPT
    # ------------------------------------------------------------------
    def accept_team_request(
        self,
        owner_email: Optional[str],
        team_name: Optional[str],
        requester_name: Optional[str],
    ) -> Result[None]:
        """Turn the requester's pending request into a membership."""
        params_are_valid = self._fail_if(
            not owner_email or not team_name or not requester_name,
            "Owner, user and team name must be provided.",
        )
        if params_are_valid.is_error:
            return Result.fail(params_are_valid)

        # An unknown requester reads as a missing request, not a missing user
        resolved = self._resolve(
            owner_email, team_name, requester_name,
            missing_requester_message="Team request does not exist.",
            action="accept requests",
        )
        if resolved.is_error:
            return Result.fail(resolved)
        team, requester = resolved.value

        request = self._requests.find_first(team.id, requester.id)
        request_exists = self._fail_if(request is None, "Team request does not exist.", 404)
        if request_exists.is_error:
            return Result.fail(request_exists)

        has_capacity = validate_capacity(team, self._teams.count_members(team.id), logger=self._log)
        if has_capacity.is_error:
            return Result.fail(has_capacity)

        try:
            accepted = self._requests.accept(request, team.max_member_count)
        except TeamFullError as e:
            return Result.fail(self._fail_if(True, "Team is full.", 409, cause=e))
        except DuplicateEntityError as e:
            return Result.fail(self._fail_if(True, "User is already a team member.", 409, cause=e))
        # Zero rows deleted: a concurrent accept or delete consumed the request first
        request_consumed = self._fail_if(not accepted, "Team request not found.", 404)
        if request_consumed.is_error:
            return Result.fail(request_consumed)

        self._log.info("team_request_accepted", team=team.name, user=requester.name)
        return Result.ok()

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------
    def delete_team_request(
        self,
        owner_email: Optional[str],
        team_name: Optional[str],
        requester_name: Optional[str],
    ) -> Result[None]:
        """Reject (owner-side) every pending request of ``requester_name`` for the team."""
        params_are_valid = self._fail_if(
            not owner_email or not team_name or not requester_name,
            "Owner, user and team name must be provided.",
        )
        if params_are_valid.is_error:
            return Result.fail(params_are_valid)

        resolved = self._resolve(
            owner_email, team_name, requester_name,
            missing_requester_message="User does not exist.",
            action="delete requests",
        )
        if resolved.is_error:
            return Result.fail(resolved)
        team, requester = resolved.value

        deleted = self._requests.delete_many(team.id, requester.id)
        request_deleted = self._fail_if(deleted < 1, "Team request not found.", 404)
        if request_deleted.is_error:
            return Result.fail(request_deleted)

        return Result.ok()

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def get_all_team_requests(self, owner_email: Optional[str], team_name: Optional[str]) -> Result[List[dict]]:
        params_are_valid = self._fail_if(not owner_email or not team_name, "Owner and team name must be provided.")
        if params_are_valid.is_error:
            return Result.fail(params_are_valid)

        owner = self._users.get_by_email(owner_email)
        team = self._teams.get_by_name(team_name)
        existence = Result.merge([
            self._fail_if(owner is None, "Owner does not exist.", 404),
            self._fail_if(team is None, "Team does not exist.", 404),
        ])
        if existence.is_error:
            return Result.fail(existence)
        ownership = validate_ownership(team, owner, "fetch join requests", logger=self._log)
        if ownership.is_error:
            return Result.fail(ownership)

        return Result.ok([
            self.map_to_team_request_dto(request, user)
            for request, user in self._requests.list_for_team(team.id)
        ])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _resolve(
        self,
        owner_email: str,
        team_name: str,
        requester_name: str,
        missing_requester_message: str,
        action: str,
    ) -> Result[tuple[Team, User]]:
        owner = self._users.get_by_email(owner_email)
        team = self._teams.get_by_name(team_name)
        requester = self._users.get_by_name(requester_name)

        existence = Result.merge([
            self._fail_if(requester is None, missing_requester_message, 404),
            self._fail_if(owner is None, "Owner does not exist.", 404),
            self._fail_if(team is None, "Team does not exist.", 404),
        ])
        if existence.is_error:
            return existence

        ownership = validate_ownership(team, owner, action, logger=self._log)
        if ownership.is_error:
            return ownership

        return Result.ok((team, requester))

    @staticmethod
    def map_to_team_request_dto(request: TeamRequest, user: User) -> dict:
        return {
            "name": user.name,
            "message": request.message,
        }
