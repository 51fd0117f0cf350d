"""Store-level exceptions shared by every repository implementation."""
from __future__ import annotations


class DuplicateEntityError(Exception):
    """A write hit a uniqueness constraint (the store's authoritative guard)."""

    def __init__(self, entity: str, detail: str = ""):
        super().__init__(f"Duplicate {entity}: {detail}" if detail else f"Duplicate {entity}")
        self.entity = entity
        self.detail = detail


class TeamFullError(Exception):
    """A membership insert found the team already at its maximum member count."""

    def __init__(self, team_id: str, max_member_count: int):
        super().__init__(f"Team {team_id} is full ({max_member_count} members)")
        self.team_id = team_id
        self.max_member_count = max_member_count
