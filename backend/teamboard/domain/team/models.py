"""Team domain models: pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Team:
    id: str
    name: str
    max_member_count: int
    owner_id: str  # immutable once created
    created_at: str = ""


@dataclass
class TeamMembership:
    id: str
    team_id: str
    user_id: str
    created_at: str = ""
