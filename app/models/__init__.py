"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Order matters: import parent tables before child tables.
"""

from app.models.admin_user import AdminUser
from app.models.vehicle import Vehicle, VehicleStatus
from app.models.vehicle_feature import VehicleFeature
from app.models.vehicle_image import VehicleImage
from app.models.inquiry import Inquiry, InquiryStatus
from app.models.customer_form import CustomerForm, CustomerFormImage

__all__ = [
    "AdminUser",
    "Vehicle",
    "VehicleStatus",
    "VehicleFeature",
    "VehicleImage",
    "Inquiry",
    "InquiryStatus",
    "CustomerForm",
    "CustomerFormImage",
]
