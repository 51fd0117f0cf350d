"""Team join-request API endpoints. The acting user always comes from the token."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from teamboard.api.auth import get_current_user
from teamboard.api.responses import result_response
from teamboard.application.team_request_app_service import TeamRequestAppService
from teamboard.container import get_team_request_app_service

router = APIRouter(prefix="/api/team", tags=["team-requests"])


class CreateRequestBody(BaseModel):
    teamName: Optional[str] = None
    message: Optional[str] = None


class RequesterBody(BaseModel):
    teamName: Optional[str] = None
    name: Optional[str] = None


@router.get("/request")
def list_team_requests(
    teamName: Optional[str] = None,
    svc: TeamRequestAppService = Depends(get_team_request_app_service),
    current_user: dict = Depends(get_current_user),
):
    return result_response(svc.get_all_team_requests(current_user.get("email"), teamName))


@router.post("/request")
def create_team_request(
    body: CreateRequestBody,
    svc: TeamRequestAppService = Depends(get_team_request_app_service),
    current_user: dict = Depends(get_current_user),
):
    result = svc.create_team_request(current_user.get("email"), body.teamName, body.message)
    return result_response(result, "Team request successfully created.")


@router.put("/request")
def accept_team_request(
    body: RequesterBody,
    svc: TeamRequestAppService = Depends(get_team_request_app_service),
    current_user: dict = Depends(get_current_user),
):
    result = svc.accept_team_request(current_user.get("email"), body.teamName, body.name)
    return result_response(result, "Team request successfully accepted.")


@router.delete("/request")
def delete_team_request(
    body: RequesterBody,
    svc: TeamRequestAppService = Depends(get_team_request_app_service),
    current_user: dict = Depends(get_current_user),
):
    result = svc.delete_team_request(current_user.get("email"), body.teamName, body.name)
    return result_response(result, "Team request successfully deleted.")
