import logging
from typing import Sequence

from fastapi import UploadFile
from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.customer_form import CustomerForm, CustomerFormImage
from app.models.inquiry import InquiryStatus
from app.schemas.customer_form import CustomerFormCreateRequest
from app.schemas.inquiry import InquiryStatusRequest
from app.services.upload_service import UploadStore, to_public_url
from app.utils.exceptions import NotFoundException, DatabaseWriteException

logger = logging.getLogger(__name__)


def _serialize(f: CustomerForm, base_url: str) -> dict:
    return {
        "id":           f.id,
        "contactName":  f.customerName,
        "email":        f.email,
        "phone":        f.phone,
        "vehicle": {
            "brand":        f.vehicleBrand,
            "model":        f.vehicleModel,
            "year":         f.vehicleYear,
            "mileage":      f.vehicleMileage,
            "price":        float(f.vehiclePrice) if f.vehiclePrice is not None else None,
            "fuelType":     f.vehicleFuelType,
            "transmission": f.vehicleTransmission,
            "power":        f.vehiclePower,
            "description":  f.vehicleDescription,
        },
        "images": [
            {"id": img.id, "path": img.imagePath, "url": to_public_url(img.imagePath, base_url),
             "sortOrder": img.sortOrder}
            for img in f.images
        ],
        "status":    f.status,
        "createdAt": f.createdAt.isoformat() if f.createdAt else None,
        "updatedAt": f.updatedAt.isoformat() if f.updatedAt else None,
    }


class CustomerFormService:

    def create(
        self,
        db: Session,
        store: UploadStore,
        data: CustomerFormCreateRequest,
        files: Sequence[UploadFile],
        base_url: str,
    ) -> dict:
        stored = store.save_all(files)

        try:
            form = CustomerForm(
                customerName=data.contactName,
                email=str(data.email),
                phone=data.phone,
                vehicleBrand=data.brand,
                vehicleModel=data.model,
                vehicleYear=data.year,
                vehicleMileage=data.mileage,
                vehiclePrice=data.price,
                vehicleFuelType=data.fuelType,
                vehicleTransmission=data.transmission,
                vehiclePower=data.power,
                vehicleDescription=data.description,
                status=InquiryStatus.NEW,
            )
            db.add(form)
            db.flush()
            form_id = form.id

            if stored:
                db.execute(
                    insert(CustomerFormImage),
                    [
                        {"formId": form_id, "imagePath": s.path, "sortOrder": index}
                        for index, s in enumerate(stored)
                    ],
                )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            store.discard(stored)
            logger.error(f"Error saving customer form, transaction rolled back: {e}")
            raise DatabaseWriteException("Failed to save customer form") from e

        logger.info(f"Customer form #{form_id} saved with {len(stored)} image(s)")
        db.refresh(form)
        return _serialize(form, base_url)

    def list_forms(self, db: Session, base_url: str, page: int, limit: int, status: str | None) -> tuple[list[dict], int]:
        q = db.query(CustomerForm)
        if status:
            q = q.filter(CustomerForm.status == status.lower())
        total = q.count()
        items = q.order_by(CustomerForm.createdAt.desc(), CustomerForm.id.desc())\
                 .offset((page - 1) * limit).limit(limit).all()
        return [_serialize(f, base_url) for f in items], total

    def get(self, db: Session, form_id: int, base_url: str) -> dict:
        form = db.query(CustomerForm).filter(CustomerForm.id == form_id).first()
        if not form:
            raise NotFoundException("Customer form")
        return _serialize(form, base_url)

    def update_status(self, db: Session, form_id: int, data: InquiryStatusRequest, base_url: str) -> dict:
        form = db.query(CustomerForm).filter(CustomerForm.id == form_id).first()
        if not form:
            raise NotFoundException("Customer form")
        form.status = data.status
        db.commit()
        db.refresh(form)
        return _serialize(form, base_url)


customer_form_service = CustomerFormService()
