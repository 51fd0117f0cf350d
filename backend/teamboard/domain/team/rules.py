"""Business rules for the Team domain: naming, capacity and ownership."""
from __future__ import annotations
from typing import Any, Optional

from teamboard.domain.common.result import Result
from teamboard.domain.team.models import Team
from teamboard.domain.user.models import User

MIN_NAME_LENGTH = 4
# Capacity must be strictly greater than this
MIN_MAX_MEMBER_COUNT = 10


def name_too_short(name: Optional[str]) -> bool:
    return bool(name) and len(name) < MIN_NAME_LENGTH


def capacity_too_small(max_member_count: Any) -> bool:
    """True for a provided capacity that is not an integer above MIN_MAX_MEMBER_COUNT."""
    if max_member_count is None:
        return False
    if isinstance(max_member_count, bool) or not isinstance(max_member_count, int):
        return True
    return max_member_count <= MIN_MAX_MEMBER_COUNT


def validate_new_team(
    owner_email: Optional[str],
    name: Optional[str],
    max_member_count: Any,
    name_taken: bool,
    logger=None,
) -> Result[None]:
    """All checks run; every failure is reported together."""
    return Result.merge([
        Result.fail_if(name_taken, "Team name already exists.", 409, logger=logger),
        Result.fail_if(
            not owner_email or not name or not max_member_count,
            "Team name, owner, and max member count must be provided.",
            logger=logger,
        ),
        Result.fail_if(name_too_short(name), "Name must be at least 4 characters long.", logger=logger),
        Result.fail_if(
            capacity_too_small(max_member_count),
            "Max member count must be greater than 10.",
            logger=logger,
        ),
    ])


def validate_team_update(
    team_name: Optional[str],
    owner_email: Optional[str],
    name: Optional[str],
    max_member_count: Any,
    name_taken: bool,
    logger=None,
) -> Result[None]:
    return Result.merge([
        Result.fail_if(name_taken, "Team name already exists.", 409, logger=logger),
        Result.fail_if(not team_name or not owner_email, "Team name and owner must be provided.", logger=logger),
        Result.fail_if(
            not name and max_member_count is None,
            "Team name or max member count must be provided.",
            logger=logger,
        ),
        Result.fail_if(name_too_short(name), "Name must be at least 4 characters long.", logger=logger),
        Result.fail_if(
            capacity_too_small(max_member_count),
            "Max member count must be greater than 10.",
            logger=logger,
        ),
    ])


def validate_ownership(team: Team, owner: User, action: str, logger=None) -> Result[None]:
    """403 unless ``owner`` owns ``team``. ``action`` completes "Only team owner can ..."."""
    return Result.fail_if(
        team.owner_id != owner.id,
        f"Forbidden. Only team owner can {action}.",
        403,
        logger=logger,
    )


def validate_capacity(team: Team, member_count: int, logger=None) -> Result[None]:
    """409 when the team has no seat left for one more member."""
    return Result.fail_if(member_count >= team.max_member_count, "Team is full.", 409, logger=logger)
