import json
import logging
from typing import Any, Sequence

from fastapi import UploadFile
from sqlalchemy import insert, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models.vehicle import Vehicle
from app.models.vehicle_feature import VehicleFeature
from app.models.vehicle_image import VehicleImage
from app.schemas.vehicle import (
    VehicleCreateRequest, VehicleUpdateRequest, VehicleStatusRequest,
)
from app.services.upload_service import UploadStore, to_public_url
from app.utils.exceptions import NotFoundException, DatabaseWriteException

logger = logging.getLogger(__name__)


def parse_features(raw: Any) -> list[str]:
    """
    Turn the `features` form field into a clean list of labels.

    The field arrives as a JSON-encoded array. Anything that does not
    decode to an array yields an empty list instead of an error.
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, (list, tuple)):
        items = raw
    else:
        try:
            items = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not parse features, ignoring them: {e}")
            return []
    if not isinstance(items, list):
        logger.warning(f"Features is not a JSON array, ignoring it: {type(items).__name__}")
        return []

    features = []
    for item in items:
        if item is None or isinstance(item, (dict, list)):
            continue
        label = str(item).strip()
        if label:
            features.append(label)
    return features


def _serialize(v: Vehicle, base_url: str) -> dict:
    return {
        "id":           v.id,
        "brand":        v.brand,
        "model":        v.model,
        "year":         v.year,
        "price":        float(v.price) if v.price is not None else None,
        "mileage":      v.mileage,
        "fuelType":     v.fuelType,
        "transmission": v.transmission,
        "power":        v.power,
        "description":  v.description,
        "status":       v.status,
        "features":     [f.feature for f in v.features],
        "images": [
            {
                "id":        img.id,
                "path":      img.imagePath,
                "url":       to_public_url(img.imagePath, base_url),
                "sortOrder": img.sortOrder,
            }
            for img in v.images
        ],
        "createdAt":    v.createdAt.isoformat() if v.createdAt else None,
        "updatedAt":    v.updatedAt.isoformat() if v.updatedAt else None,
    }


class VehicleService:

    def _get_or_404(self, db: Session, vehicle_id: int) -> Vehicle:
        v = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
        if not v:
            raise NotFoundException("Vehicle")
        return v

    def list_vehicles(
        self, db: Session, base_url: str, page: int, limit: int,
        search: str | None, status: str | None, brand: str | None,
    ) -> tuple[list[dict], int]:
        q = db.query(Vehicle).options(
            selectinload(Vehicle.features),
            selectinload(Vehicle.images),
        )

        if search:
            kw = f"%{search}%"
            q = q.filter(or_(
                Vehicle.brand.ilike(kw),
                Vehicle.model.ilike(kw),
                Vehicle.description.ilike(kw),
            ))
        if status:
            q = q.filter(Vehicle.status == status.lower())
        if brand:
            q = q.filter(Vehicle.brand.ilike(brand))

        total = q.count()
        items = q.order_by(Vehicle.createdAt.desc(), Vehicle.id.desc())\
                 .offset((page - 1) * limit).limit(limit).all()
        return [_serialize(v, base_url) for v in items], total

    def get_vehicle(self, db: Session, vehicle_id: int, base_url: str) -> dict:
        return _serialize(self._get_or_404(db, vehicle_id), base_url)

    def create_vehicle(
        self,
        db: Session,
        store: UploadStore,
        data: VehicleCreateRequest,
        features: list[str],
        files: Sequence[UploadFile],
        base_url: str,
    ) -> dict:
        """
        Store the uploaded images, then write the vehicle, its features and
        its image references in a single transaction.

        Files are written first. If the transaction fails they are removed
        again and no row of the vehicle survives.
        """
        stored = store.save_all(files)

        try:
            vehicle = Vehicle(**data.model_dump())
            db.add(vehicle)
            db.flush()
            vehicle_id = vehicle.id

            if features:
                db.execute(
                    insert(VehicleFeature),
                    [{"vehicleId": vehicle_id, "feature": f} for f in features],
                )

            if stored:
                db.execute(
                    insert(VehicleImage),
                    [
                        {"vehicleId": vehicle_id, "imagePath": s.path, "sortOrder": index}
                        for index, s in enumerate(stored)
                    ],
                )

            db.commit()
        except Exception as e:
            db.rollback()
            store.discard(stored)
            logger.error(f"Error creating vehicle, transaction rolled back: {e}")
            if isinstance(e, SQLAlchemyError):
                reason = getattr(e, "orig", None) or e
                raise DatabaseWriteException(f"Failed to create vehicle: {reason}") from e
            raise

        logger.info(
            f"Created vehicle #{vehicle_id} ({data.brand} {data.model}) "
            f"with {len(features)} feature(s) and {len(stored)} image(s)"
        )
        db.refresh(vehicle)
        return _serialize(vehicle, base_url)

    def update_vehicle(self, db: Session, vehicle_id: int, data: VehicleUpdateRequest, base_url: str) -> dict:
        v = self._get_or_404(db, vehicle_id)

        changes = data.model_dump(exclude_unset=True)
        features = changes.pop("features", None)
        for field, value in changes.items():
            if value is not None:
                setattr(v, field, value)

        if features is not None:
            v.features = [VehicleFeature(feature=f) for f in parse_features(features)]

        db.commit()
        db.refresh(v)
        return _serialize(v, base_url)

    def update_status(self, db: Session, vehicle_id: int, data: VehicleStatusRequest, base_url: str) -> dict:
        v = self._get_or_404(db, vehicle_id)
        old_status = v.status
        v.status = data.status
        db.commit()
        db.refresh(v)
        logger.info(f"Vehicle #{v.id} status changed {old_status} -> {v.status}")
        return _serialize(v, base_url)

    def delete_vehicle(self, db: Session, store: UploadStore, vehicle_id: int) -> None:
        v = self._get_or_404(db, vehicle_id)
        paths = [img.imagePath for img in v.images]
        db.delete(v)
        db.commit()
        store.delete_paths(paths)
        logger.info(f"Deleted vehicle #{vehicle_id} and {len(paths)} image file(s)")


vehicle_service = VehicleService()
