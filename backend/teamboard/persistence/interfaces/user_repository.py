"""Abstract repository interface for users."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from teamboard.domain.user.models import User


class UserRepository(ABC):

    @abstractmethod
    def create(self, user: User) -> User:
        """Insert a user. Raises DuplicateEntityError on a taken email or name."""
        ...

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[User]:
        ...

    @abstractmethod
    def list_by_score(self) -> List[User]:
        """Return all users ordered by score DESC."""
        ...

    @abstractmethod
    def count_with_score_above(self, score: int) -> int:
        """Return how many users have a strictly greater score."""
        ...

    @abstractmethod
    def team_names(self, user_id: str) -> List[str]:
        """Return the names of the teams the user is a member of, in join order."""
        ...
