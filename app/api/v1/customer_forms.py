from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_admin_user, get_upload_store, get_base_url
from app.models.admin_user import AdminUser
from app.schemas.common import ErrorResponse, success_response, paginated_response, validate_form
from app.schemas.customer_form import CustomerFormCreateRequest
from app.schemas.inquiry import InquiryStatusRequest
from app.services.customer_form_service import customer_form_service
from app.services.upload_service import UploadStore

router = APIRouter(prefix="/customer-forms")


# ─── PUBLIC ───────────────────────────────────────────────────────────────────
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="[PUBLIC] Offer a vehicle for sale, with photos",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or oversized image"},
        500: {"model": ErrorResponse, "description": "Database write failed, nothing persisted"},
    },
)
def create_customer_form(
    contactName:  str                        = Form(...),
    email:        str                        = Form(...),
    phone:        Optional[str]              = Form(None),
    brand:        str                        = Form(...),
    model:        str                        = Form(...),
    year:         Optional[int]              = Form(None),
    mileage:      Optional[int]              = Form(None),
    price:        Optional[Decimal]          = Form(None),
    fuelType:     Optional[str]              = Form(None),
    transmission: Optional[str]              = Form(None),
    power:        Optional[str]              = Form(None),
    description:  Optional[str]              = Form(None),
    images:       Optional[List[UploadFile]] = File(None),
    db:           Session                    = Depends(get_db),
    store:        UploadStore                = Depends(get_upload_store),
    base_url:     str                        = Depends(get_base_url),
):
    body = validate_form(
        CustomerFormCreateRequest,
        contactName=contactName, email=email, phone=phone, brand=brand, model=model,
        year=year, mileage=mileage, price=price, fuelType=fuelType,
        transmission=transmission, power=power, description=description,
    )
    data = customer_form_service.create(db, store, body, images or [], base_url)
    return success_response("Customer form saved successfully", data)


# ─── ADMIN ────────────────────────────────────────────────────────────────────
@router.get("", summary="List customer forms (Admin)")
def list_customer_forms(
    page:     int           = Query(1, ge=1),
    limit:    int           = Query(20, ge=1, le=100),
    status:   Optional[str] = Query(None, description="new | in_progress | closed"),
    db:       Session       = Depends(get_db),
    base_url: str           = Depends(get_base_url),
    _:        AdminUser     = Depends(get_admin_user),
):
    data, total = customer_form_service.list_forms(db, base_url, page, limit, status)
    return paginated_response("Customer forms retrieved successfully", data, total, page, limit)


@router.get("/{form_id}", summary="Get customer form by ID (Admin)")
def get_customer_form(
    form_id:  int,
    db:       Session   = Depends(get_db),
    base_url: str       = Depends(get_base_url),
    _:        AdminUser = Depends(get_admin_user),
):
    return success_response("Customer form retrieved", customer_form_service.get(db, form_id, base_url))


@router.patch("/{form_id}/status", summary="Change customer form status (Admin)")
def update_status(
    form_id:  int,
    body:     InquiryStatusRequest,
    db:       Session   = Depends(get_db),
    base_url: str       = Depends(get_base_url),
    _:        AdminUser = Depends(get_admin_user),
):
    data = customer_form_service.update_status(db, form_id, body, base_url)
    return success_response("Customer form status updated", data)
