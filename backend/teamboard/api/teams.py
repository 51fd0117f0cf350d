"""Team CRUD API endpoints."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from teamboard.api.auth import get_current_user
from teamboard.api.responses import result_response
from teamboard.application.team_app_service import TeamAppService
from teamboard.container import get_team_app_service

router = APIRouter(prefix="/api", tags=["teams"])


# ------------------------------------------------------------------
# Pydantic schemas (field names are the wire contract)
# ------------------------------------------------------------------
class CreateTeamBody(BaseModel):
    name: Optional[str] = None
    maxMemberCount: Optional[int] = 11


class UpdateData(BaseModel):
    name: Optional[str] = None
    maxMemberCount: Optional[int] = None


class UpdateTeamBody(BaseModel):
    teamName: Optional[str] = None
    updateData: Optional[UpdateData] = None


class DeleteTeamBody(BaseModel):
    teamName: Optional[str] = None


# ------------------------------------------------------------------
# Team endpoints
# ------------------------------------------------------------------
@router.get("/team")
def get_teams(
    name: Optional[str] = None,
    svc: TeamAppService = Depends(get_team_app_service),
    current_user: dict = Depends(get_current_user),
):
    if name:
        return result_response(svc.get_team(name))
    return result_response(svc.get_all_teams())


@router.post("/team")
def create_team(
    body: CreateTeamBody,
    svc: TeamAppService = Depends(get_team_app_service),
    current_user: dict = Depends(get_current_user),
):
    return result_response(svc.create_team(current_user.get("email"), body.name, body.maxMemberCount))


@router.put("/team")
def update_team(
    body: UpdateTeamBody,
    svc: TeamAppService = Depends(get_team_app_service),
    current_user: dict = Depends(get_current_user),
):
    update_data = body.updateData or UpdateData()
    result = svc.update_team(
        body.teamName,
        current_user.get("email"),
        name=update_data.name,
        max_member_count=update_data.maxMemberCount,
    )
    return result_response(result)


@router.delete("/team")
def delete_team(
    body: DeleteTeamBody,
    svc: TeamAppService = Depends(get_team_app_service),
    current_user: dict = Depends(get_current_user),
):
    result = svc.delete_team(body.teamName, current_user.get("email"))
    return result_response(result, "Successfully deleted team.")
