from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_admin_user, get_upload_store, get_base_url
from app.models.admin_user import AdminUser
from app.schemas.common import ErrorResponse, success_response, paginated_response, validate_form
from app.schemas.inquiry import InquiryCreateRequest
from app.schemas.vehicle import (
    VehicleCreateRequest, VehicleUpdateRequest, VehicleStatusRequest,
)
from app.services.inquiry_service import inquiry_service
from app.services.upload_service import UploadStore
from app.services.vehicle_service import vehicle_service, parse_features

router = APIRouter(prefix="/vehicles")


@router.get("", summary="List vehicles (paginated)")
def list_vehicles(
    page:     int           = Query(1, ge=1),
    limit:    int           = Query(20, ge=1, le=100),
    search:   Optional[str] = Query(None),
    status:   Optional[str] = Query(None, description="available | reserved | sold"),
    brand:    Optional[str] = Query(None),
    db:       Session       = Depends(get_db),
    base_url: str           = Depends(get_base_url),
):
    data, total = vehicle_service.list_vehicles(db, base_url, page, limit, search, status, brand)
    return paginated_response("Vehicles retrieved successfully", data, total, page, limit)


@router.get("/{vehicle_id}", summary="Get vehicle by ID")
def get_vehicle(vehicle_id: int, db: Session = Depends(get_db), base_url: str = Depends(get_base_url)):
    return success_response("Vehicle retrieved", vehicle_service.get_vehicle(db, vehicle_id, base_url))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create vehicle with features and images (Admin)",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or oversized image"},
        500: {"model": ErrorResponse, "description": "Database write failed, nothing persisted"},
    },
)
def create_vehicle(
    brand:          str                        = Form(...),
    model:          str                        = Form(...),
    year:           int                        = Form(...),
    price:          Decimal                    = Form(...),
    mileage:        int                        = Form(...),
    fuelType:       str                        = Form(...),
    transmission:   str                        = Form(...),
    power:          str                        = Form(...),
    description:    Optional[str]              = Form(None),
    vehicle_status: Optional[str]              = Form(None, alias="status"),
    features:       Optional[str]              = Form(None, description='JSON array, e.g. ["ABS", "Navi"]'),
    images:         Optional[List[UploadFile]] = File(None, description="Up to 10 images, 5 MB each"),
    db:             Session                    = Depends(get_db),
    store:          UploadStore                = Depends(get_upload_store),
    base_url:       str                        = Depends(get_base_url),
    _:              AdminUser                  = Depends(get_admin_user),
):
    body = validate_form(
        VehicleCreateRequest,
        brand=brand, model=model, year=year, price=price, mileage=mileage,
        fuelType=fuelType, transmission=transmission, power=power,
        description=description, status=vehicle_status,
    )
    data = vehicle_service.create_vehicle(
        db, store, body, parse_features(features), images or [], base_url,
    )
    return success_response("Vehicle created successfully", data)


@router.put("/{vehicle_id}", summary="Update vehicle (Admin)")
def update_vehicle(
    vehicle_id: int,
    body:       VehicleUpdateRequest,
    db:         Session   = Depends(get_db),
    base_url:   str       = Depends(get_base_url),
    _:          AdminUser = Depends(get_admin_user),
):
    data = vehicle_service.update_vehicle(db, vehicle_id, body, base_url)
    return success_response("Vehicle updated successfully", data)


@router.patch("/{vehicle_id}/status", summary="Change vehicle status (Admin)")
def update_status(
    vehicle_id: int,
    body:       VehicleStatusRequest,
    db:         Session   = Depends(get_db),
    base_url:   str       = Depends(get_base_url),
    _:          AdminUser = Depends(get_admin_user),
):
    data = vehicle_service.update_status(db, vehicle_id, body, base_url)
    return success_response("Vehicle status updated", data)


@router.delete("/{vehicle_id}", summary="Delete vehicle with its features, images and inquiries (Admin)")
def delete_vehicle(
    vehicle_id: int,
    db:         Session     = Depends(get_db),
    store:      UploadStore = Depends(get_upload_store),
    _:          AdminUser   = Depends(get_admin_user),
):
    vehicle_service.delete_vehicle(db, store, vehicle_id)
    return success_response("Vehicle deleted successfully", None)


# ─── Inquiries (public) ───────────────────────────────────────────────────────
@router.post(
    "/{vehicle_id}/inquiries",
    status_code=status.HTTP_201_CREATED,
    summary="[PUBLIC] Send an inquiry about a vehicle",
)
def create_inquiry(
    vehicle_id: int,
    body:       InquiryCreateRequest,
    db:         Session = Depends(get_db),
):
    data = inquiry_service.create(db, vehicle_id, body)
    return success_response("Inquiry sent successfully", data)
