"""User API: single lookup or the full leaderboard."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends

from teamboard.api.auth import get_current_user
from teamboard.api.responses import result_response
from teamboard.application.user_app_service import UserAppService
from teamboard.container import get_user_app_service

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/user")
def get_users(
    email: Optional[str] = None,
    name: Optional[str] = None,
    svc: UserAppService = Depends(get_user_app_service),
    current_user: dict = Depends(get_current_user),
):
    if email or name:
        return result_response(svc.get_user(email=email, name=name))
    return result_response(svc.get_all_users())
