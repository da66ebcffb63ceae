from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class VehicleImage(Base):
    __tablename__ = "vehicle_images"

    id        = Column(Integer, primary_key=True, index=True)
    vehicleId = Column("vehicleId", Integer, ForeignKey("vehicles.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    imagePath = Column("imagePath", String(255), nullable=False)   # host-relative, e.g. /uploads/vehicles/x.jpg
    sortOrder = Column("sortOrder", Integer, nullable=False, default=0, server_default="0")
    createdAt = Column("createdAt", TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    vehicle = relationship("Vehicle", back_populates="images")

    def __repr__(self):
        return f"<VehicleImage id={self.id} vehicle={self.vehicleId} order={self.sortOrder}>"
