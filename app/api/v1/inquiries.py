from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_admin_user
from app.models.admin_user import AdminUser
from app.schemas.common import success_response, paginated_response
from app.schemas.inquiry import InquiryStatusRequest
from app.services.inquiry_service import inquiry_service

router = APIRouter(prefix="/inquiries")


@router.get("", summary="List inquiries (Admin)")
def list_inquiries(
    page:      int           = Query(1, ge=1),
    limit:     int           = Query(20, ge=1, le=100),
    status:    Optional[str] = Query(None, description="new | in_progress | closed"),
    vehicleId: Optional[int] = Query(None),
    db:        Session       = Depends(get_db),
    _:         AdminUser     = Depends(get_admin_user),
):
    data, total = inquiry_service.list_inquiries(db, page, limit, status, vehicleId)
    return paginated_response("Inquiries retrieved successfully", data, total, page, limit)


@router.patch("/{inquiry_id}/status", summary="Change inquiry status (Admin)")
def update_status(
    inquiry_id: int,
    body:       InquiryStatusRequest,
    db:         Session   = Depends(get_db),
    _:          AdminUser = Depends(get_admin_user),
):
    data = inquiry_service.update_status(db, inquiry_id, body)
    return success_response("Inquiry status updated", data)


@router.delete("/{inquiry_id}", summary="Delete inquiry (Admin)")
def delete_inquiry(
    inquiry_id: int,
    db:         Session   = Depends(get_db),
    _:          AdminUser = Depends(get_admin_user),
):
    inquiry_service.delete(db, inquiry_id)
    return success_response("Inquiry deleted successfully", None)
