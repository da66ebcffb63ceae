from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class VehicleFeature(Base):
    __tablename__ = "vehicle_features"

    id        = Column(Integer, primary_key=True, index=True)
    vehicleId = Column("vehicleId", Integer, ForeignKey("vehicles.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    feature   = Column(String(255), nullable=False)
    createdAt = Column("createdAt", TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    vehicle = relationship("Vehicle", back_populates="features")

    def __repr__(self):
        return f"<VehicleFeature id={self.id} vehicle={self.vehicleId} feature={self.feature}>"
