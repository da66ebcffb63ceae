from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_admin_user
from app.models.admin_user import AdminUser
from app.schemas.auth import LoginRequest, AdminOut
from app.schemas.common import SuccessResponse, success_response
from app.services.auth_service import auth_service

router = APIRouter(prefix="/auth")


# ─── POST /auth/login ─────────────────────────────────────────────────────────
@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Admin login, returns a Bearer access token",
    response_model=SuccessResponse,
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate an admin account.
    Send the returned accessToken as `Authorization: Bearer <token>`.
    """
    result = auth_service.login(db, data)
    return success_response("Login successful", result)


# ─── GET /auth/me ─────────────────────────────────────────────────────────────
@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Get the logged-in admin",
    response_model=SuccessResponse,
)
def me(current_admin: AdminUser = Depends(get_admin_user)):
    return success_response("Admin retrieved", AdminOut.model_validate(current_admin).model_dump())
