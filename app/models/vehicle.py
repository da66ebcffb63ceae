from sqlalchemy import Column, Integer, String, Text, Numeric, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class VehicleStatus:
    AVAILABLE = "available"
    RESERVED  = "reserved"
    SOLD      = "sold"

    ALL = (AVAILABLE, RESERVED, SOLD)


class Vehicle(Base):
    __tablename__ = "vehicles"

    id           = Column(Integer, primary_key=True, index=True)
    brand        = Column(String(100), nullable=False, index=True)
    model        = Column(String(100), nullable=False)
    year         = Column(Integer, nullable=False)
    price        = Column(Numeric(10, 2), nullable=False)
    mileage      = Column(Integer, nullable=False)
    fuelType     = Column("fuelType",     String(50), nullable=False)
    transmission = Column(String(50), nullable=False)
    power        = Column(String(50), nullable=False)
    description  = Column(Text, nullable=True)
    status       = Column(String(20), nullable=False, default=VehicleStatus.AVAILABLE,
                          server_default=VehicleStatus.AVAILABLE)
    createdAt    = Column("createdAt", TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt    = Column("updatedAt", TIMESTAMP(timezone=True), server_default=func.now(),
                          onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    features  = relationship("VehicleFeature", back_populates="vehicle",
                             cascade="all, delete-orphan", order_by="VehicleFeature.id")
    images    = relationship("VehicleImage", back_populates="vehicle",
                             cascade="all, delete-orphan", order_by="VehicleImage.sortOrder")
    inquiries = relationship("Inquiry", back_populates="vehicle",
                             cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Vehicle id={self.id} {self.brand} {self.model} ({self.year})>"
