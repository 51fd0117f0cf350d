"""TeamRequest domain model: a pending ask to join a team."""
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class TeamRequest:
    id: str
    team_id: str
    user_id: str
    message: str = ""
    created_at: str = ""
