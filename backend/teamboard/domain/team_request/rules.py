"""Business rules for join requests."""
from __future__ import annotations

from teamboard.domain.common.result import Result


def validate_new_request(is_member: bool, request_exists: bool, logger=None) -> Result[None]:
    """A user may have one pending request per team, and none for a team they already belong to."""
    return Result.merge([
        Result.fail_if(is_member, "User is already a team member.", 409, logger=logger),
        Result.fail_if(request_exists, "Team request already exists.", 409, logger=logger),
    ])
