"""Abstract repository interface for pending join requests."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from teamboard.domain.team_request.models import TeamRequest
from teamboard.domain.user.models import User


class TeamRequestRepository(ABC):

    @abstractmethod
    def create(self, request: TeamRequest) -> TeamRequest:
        """Insert a request. Raises DuplicateEntityError if the (team, user) pair already has one."""
        ...

    @abstractmethod
    def find_first(self, team_id: str, user_id: str) -> Optional[TeamRequest]:
        """Return the oldest pending request for the pair, or None."""
        ...

    @abstractmethod
    def list_for_team(self, team_id: str) -> List[Tuple[TeamRequest, User]]:
        """Return (request, requesting user) pairs for a team, oldest first."""
        ...

    @abstractmethod
    def delete_many(self, team_id: str, user_id: str) -> int:
        """Delete every request for the pair. Returns the number of rows deleted."""
        ...

    @abstractmethod
    def accept(self, request: TeamRequest, max_member_count: int) -> bool:
        """Delete the request and insert the membership in one transaction.
        Returns False, without inserting, when the request row was already gone.
        Raises TeamFullError when the team already holds max_member_count members,
        and DuplicateEntityError if the user is already a member."""
        ...
