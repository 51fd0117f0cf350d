"""Application service: team lifecycle: validate → resolve → authorize → persist."""
from __future__ import annotations
from typing import Any, List, Optional

from teamboard.application.base import AppService
from teamboard.application.user_app_service import UserAppService
from teamboard.domain.common.ids import new_id, now_iso
from teamboard.domain.common.result import Result
from teamboard.domain.team.models import Team
from teamboard.domain.team.rules import validate_new_team, validate_ownership, validate_team_update
from teamboard.domain.user.models import User
from teamboard.persistence.interfaces.errors import DuplicateEntityError
from teamboard.persistence.interfaces.team_repository import TeamRepository
from teamboard.persistence.interfaces.user_repository import UserRepository


class TeamAppService(AppService):
    def __init__(
        self,
        teams: TeamRepository,
        users: UserRepository,
        user_service: UserAppService,
        logger=None,
    ):
        super().__init__(logger)
        self._teams = teams
        self._users = users
        self._user_service = user_service

    # ------------------------------------------------------------------
    # CREATE
    # ------------------------------------------------------------------
    def create_team(self, owner_email: Optional[str], name: Optional[str], max_member_count: Any) -> Result[dict]:
        """Create a team owned by ``owner_email``; the owner becomes its first member."""
        name_taken = bool(name) and self._teams.get_by_name(name) is not None
        data_validation = validate_new_team(owner_email, name, max_member_count, name_taken, logger=self._log)
        if data_validation.is_error:
            return Result.fail(data_validation)

        owner = self._users.get_by_email(owner_email)
        # External message never says whether the email is registered
        owner_exists = self._fail_if(owner is None, "Failed to create team.", 500, "User does not exist.", 404)
        if owner_exists.is_error:
            return Result.fail(owner_exists)

        team = Team(
            id=new_id(),
            name=name,
            max_member_count=max_member_count,
            owner_id=owner.id,
            created_at=now_iso(),
        )
        try:
            self._teams.create_with_owner(team)
        except DuplicateEntityError as e:
            return Result.fail(self._fail_if(True, "Team name already exists.", 409, cause=e))

        return Result.ok(self.map_to_team_dto(team, owner, include_members=True))

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def get_team(self, name: Optional[str]) -> Result[dict]:
        name_is_valid = self._fail_if(not name, "Team name must be provided.")
        if name_is_valid.is_error:
            return Result.fail(name_is_valid)

        team = self._teams.get_by_name(name)
        team_exists = self._fail_if(team is None, "Team does not exist.", 404)
        if team_exists.is_error:
            return Result.fail(team_exists)

        owner = self._users.get_by_id(team.owner_id)
        return Result.ok(self.map_to_team_dto(team, owner, include_members=True))

    def get_all_teams(self) -> Result[List[dict]]:
        return Result.ok([
            self.map_to_team_dto(team, self._users.get_by_id(team.owner_id))
            for team in self._teams.list_all()
        ])

    # ------------------------------------------------------------------
    # UPDATE
    # ------------------------------------------------------------------
    def update_team(
        self,
        team_name: Optional[str],
        owner_email: Optional[str],
        name: Optional[str] = None,
        max_member_count: Any = None,
    ) -> Result[dict]:
        """Rename and/or resize a team. Only provided fields change."""
        # Renaming a team to its own current name is not a collision
        name_taken = bool(name) and name != team_name and self._teams.get_by_name(name) is not None
        data_validation = validate_team_update(
            team_name, owner_email, name, max_member_count, name_taken, logger=self._log
        )
        if data_validation.is_error:
            return Result.fail(data_validation)

        resolved = self._resolve_owned_team(owner_email, team_name, "update the team")
        if resolved.is_error:
            return Result.fail(resolved)
        owner, team = resolved.value

        try:
            updated_team = self._teams.update(team.id, name=name or None, max_member_count=max_member_count)
        except DuplicateEntityError as e:
            return Result.fail(self._fail_if(True, "Team name already exists.", 409, cause=e))
        updated_exists = self._fail_if(updated_team is None, "Failed to update team.", 500)
        if updated_exists.is_error:
            return Result.fail(updated_exists)

        return Result.ok(self.map_to_team_dto(updated_team, owner, include_members=True))

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------
    def delete_team(self, team_name: Optional[str], owner_email: Optional[str]) -> Result[None]:
        params_are_valid = self._fail_if(not team_name or not owner_email, "Team name and owner must be provided.")
        if params_are_valid.is_error:
            return Result.fail(params_are_valid)

        resolved = self._resolve_owned_team(owner_email, team_name, "delete the team")
        if resolved.is_error:
            return Result.fail(resolved)
        _, team = resolved.value

        deleted = self._teams.delete_with_memberships(team.id)
        team_deleted = self._fail_if(not deleted, "Team does not exist.", 404)
        if team_deleted.is_error:
            return Result.fail(team_deleted)

        return Result.ok()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _resolve_owned_team(self, owner_email: str, team_name: str, action: str) -> Result[tuple[User, Team]]:
        """
        Existence first (both 404s reported together), then ownership.
        A 403 is returned on its own.
        """
        owner = self._users.get_by_email(owner_email)
        team = self._teams.get_by_name(team_name)

        existence = Result.merge([
            self._fail_if(owner is None, "Owner does not exist.", 404),
            self._fail_if(team is None, "Team does not exist.", 404),
        ])
        if existence.is_error:
            return existence

        ownership = validate_ownership(team, owner, action, logger=self._log)
        if ownership.is_error:
            return ownership

        return Result.ok((owner, team))

    def map_to_team_dto(self, team: Team, owner: User, include_members: bool = False) -> dict:
        """
        ``{name, ownerName, totalScore, memberNumber, availableMemberNumber, members?}``.
        ``availableMemberNumber`` goes negative for an over-capacity team.
        """
        members = self._teams.list_members(team.id)
        member_number = len(members)

        dto = {
            "name": team.name,
            "ownerName": owner.name,
            "totalScore": sum(member.score for member in members),
            "memberNumber": member_number,
            "availableMemberNumber": team.max_member_count - member_number,
        }
        if include_members:
            dto["members"] = [self._user_service.map_to_user_dto(member) for member in members]
        return dto
