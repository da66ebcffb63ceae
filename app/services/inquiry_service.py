import logging

from sqlalchemy.orm import Session

from app.models.inquiry import Inquiry, InquiryStatus
from app.models.vehicle import Vehicle
from app.schemas.inquiry import InquiryCreateRequest, InquiryStatusRequest
from app.utils.exceptions import NotFoundException

logger = logging.getLogger(__name__)


def _serialize(i: Inquiry) -> dict:
    return {
        "id":           i.id,
        "vehicle":      {"id": i.vehicle.id, "brand": i.vehicle.brand, "model": i.vehicle.model}
                        if i.vehicle else None,
        "customerName": i.customerName,
        "email":        i.email,
        "phone":        i.phone,
        "message":      i.message,
        "status":       i.status,
        "createdAt":    i.createdAt.isoformat() if i.createdAt else None,
        "updatedAt":    i.updatedAt.isoformat() if i.updatedAt else None,
    }


class InquiryService:

    def create(self, db: Session, vehicle_id: int, data: InquiryCreateRequest) -> dict:
        if not db.query(Vehicle).filter(Vehicle.id == vehicle_id).first():
            raise NotFoundException("Vehicle")

        inquiry = Inquiry(
            vehicleId=vehicle_id,
            customerName=data.customerName,
            email=str(data.email),
            phone=data.phone,
            message=data.message,
            status=InquiryStatus.NEW,
        )
        db.add(inquiry)
        db.commit()
        db.refresh(inquiry)
        logger.info(f"Inquiry #{inquiry.id} received for vehicle #{vehicle_id}")
        return _serialize(inquiry)

    def list_inquiries(
        self, db: Session, page: int, limit: int,
        status: str | None, vehicle_id: int | None,
    ) -> tuple[list[dict], int]:
        q = db.query(Inquiry)
        if status:
            q = q.filter(Inquiry.status == status.lower())
        if vehicle_id:
            q = q.filter(Inquiry.vehicleId == vehicle_id)

        total = q.count()
        items = q.order_by(Inquiry.createdAt.desc(), Inquiry.id.desc())\
                 .offset((page - 1) * limit).limit(limit).all()
        return [_serialize(i) for i in items], total

    def update_status(self, db: Session, inquiry_id: int, data: InquiryStatusRequest) -> dict:
        inquiry = db.query(Inquiry).filter(Inquiry.id == inquiry_id).first()
        if not inquiry:
            raise NotFoundException("Inquiry")
        inquiry.status = data.status
        db.commit()
        db.refresh(inquiry)
        return _serialize(inquiry)

    def delete(self, db: Session, inquiry_id: int) -> None:
        inquiry = db.query(Inquiry).filter(Inquiry.id == inquiry_id).first()
        if not inquiry:
            raise NotFoundException("Inquiry")
        db.delete(inquiry)
        db.commit()


inquiry_service = InquiryService()
