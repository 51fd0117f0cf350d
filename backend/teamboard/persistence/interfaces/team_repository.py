"""Abstract repository interface for teams and their memberships."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from teamboard.domain.team.models import Team
from teamboard.domain.user.models import User


class TeamRepository(ABC):

    @abstractmethod
    def create_with_owner(self, team: Team) -> Team:
        """Insert the team and the owner's membership in one transaction.
        Raises DuplicateEntityError on a taken name."""
        ...

    @abstractmethod
    def get_by_id(self, team_id: str) -> Optional[Team]:
        ...

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Team]:
        ...

    @abstractmethod
    def list_all(self) -> List[Team]:
        """Return all teams, oldest first."""
        ...

    @abstractmethod
    def update(self, team_id: str, name: Optional[str] = None, max_member_count: Optional[int] = None) -> Optional[Team]:
        """Change only the provided fields. Returns the refreshed team, or None if it is gone.
        Raises DuplicateEntityError on a taken name."""
        ...

    @abstractmethod
    def delete_with_memberships(self, team_id: str) -> bool:
        """Delete pending requests, memberships, then the team, in one transaction.
        Returns True if the team row was deleted."""
        ...

    @abstractmethod
    def list_members(self, team_id: str) -> List[User]:
        """Return member users in join order."""
        ...

    @abstractmethod
    def count_members(self, team_id: str) -> int:
        ...

    @abstractmethod
    def is_member(self, team_id: str, user_id: str) -> bool:
        ...
