"""Auth API: register, sign-in and the bearer-token dependency."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import BaseModel

from teamboard.api.responses import result_response
from teamboard.application.auth_app_service import AuthAppService
from teamboard.container import get_auth_app_service
from teamboard.core.security import decode_token
from teamboard.domain.common.result import Result

router = APIRouter(prefix="/api/auth", tags=["auth"])

_bearer = HTTPBearer(auto_error=False)


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class RegisterRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None


class SigninRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ------------------------------------------------------------------
# Dependency: get current user from Bearer token
# ------------------------------------------------------------------
def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)) -> dict:
    """Token claims (``email``, ``name``). Missing or bad tokens are answered with 403."""
    if not credentials:
        Result.fail_if(True, "Forbidden.", status.HTTP_403_FORBIDDEN, "Token missing or malformed.", 401)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden.")
    try:
        return decode_token(credentials.credentials)
    except JWTError as e:
        Result.fail_if(True, "Forbidden.", status.HTTP_403_FORBIDDEN, "Bad token.", cause=e)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden.")


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------
@router.post("/register")
def register(body: RegisterRequest, svc: AuthAppService = Depends(get_auth_app_service)):
    return result_response(svc.register(body.email, body.name, body.password))


@router.post("/signin")
def signin(body: SigninRequest, svc: AuthAppService = Depends(get_auth_app_service)):
    return result_response(svc.signin(body.email, body.password))
