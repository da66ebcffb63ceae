from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class InquiryStatus:
    NEW         = "new"
    IN_PROGRESS = "in_progress"
    CLOSED      = "closed"

    ALL = (NEW, IN_PROGRESS, CLOSED)


class Inquiry(Base):
    __tablename__ = "inquiries"

    id           = Column(Integer, primary_key=True, index=True)
    vehicleId    = Column("vehicleId",    Integer, ForeignKey("vehicles.id", ondelete="CASCADE"),
                          nullable=True, index=True)
    customerName = Column("customerName", String(100), nullable=False)
    email        = Column(String(255), nullable=False)
    phone        = Column(String(50), nullable=True)
    message      = Column(Text, nullable=True)
    status       = Column(String(20), nullable=False, default=InquiryStatus.NEW,
                          server_default=InquiryStatus.NEW)
    createdAt    = Column("createdAt", TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt    = Column("updatedAt", TIMESTAMP(timezone=True), server_default=func.now(),
                          onupdate=func.now(), nullable=False)

    vehicle = relationship("Vehicle", back_populates="inquiries")

    def __repr__(self):
        return f"<Inquiry id={self.id} vehicle={self.vehicleId} status={self.status}>"
