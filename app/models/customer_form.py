from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.inquiry import InquiryStatus


class CustomerForm(Base):
    """A customer's offer to sell their own vehicle to the dealer."""
    __tablename__ = "customer_forms"

    id                  = Column(Integer, primary_key=True, index=True)
    customerName        = Column("customerName",        String(100), nullable=False)
    email               = Column(String(255), nullable=False)
    phone               = Column(String(50), nullable=True)
    vehicleBrand        = Column("vehicleBrand",        String(100), nullable=False)
    vehicleModel        = Column("vehicleModel",        String(100), nullable=False)
    vehicleYear         = Column("vehicleYear",         Integer, nullable=True)
    vehicleMileage      = Column("vehicleMileage",      Integer, nullable=True)
    vehiclePrice        = Column("vehiclePrice",        Numeric(10, 2), nullable=True)
    vehicleFuelType     = Column("vehicleFuelType",     String(50), nullable=True)
    vehicleTransmission = Column("vehicleTransmission", String(50), nullable=True)
    vehiclePower        = Column("vehiclePower",        String(50), nullable=True)
    vehicleDescription  = Column("vehicleDescription",  Text, nullable=True)
    status              = Column(String(20), nullable=False, default=InquiryStatus.NEW,
                                 server_default=InquiryStatus.NEW)
    createdAt           = Column("createdAt", TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt           = Column("updatedAt", TIMESTAMP(timezone=True), server_default=func.now(),
                                 onupdate=func.now(), nullable=False)

    images = relationship("CustomerFormImage", back_populates="form",
                          cascade="all, delete-orphan", order_by="CustomerFormImage.sortOrder")

    def __repr__(self):
        return f"<CustomerForm id={self.id} {self.vehicleBrand} {self.vehicleModel}>"


class CustomerFormImage(Base):
    __tablename__ = "customer_form_images"

    id        = Column(Integer, primary_key=True, index=True)
    formId    = Column("formId", Integer, ForeignKey("customer_forms.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    imagePath = Column("imagePath", String(255), nullable=False)
    sortOrder = Column("sortOrder", Integer, nullable=False, default=0, server_default="0")
    createdAt = Column("createdAt", TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    form = relationship("CustomerForm", back_populates="images")
