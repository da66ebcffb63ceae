from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional

from app.models.inquiry import InquiryStatus


class InquiryCreateRequest(BaseModel):
    customerName: str
    email:        EmailStr
    phone:        Optional[str] = None
    message:      Optional[str] = None

    @field_validator("customerName")
    @classmethod
    def check_name(cls, v):
        if not v.strip(): raise ValueError("Name cannot be empty")
        return v.strip()


class InquiryStatusRequest(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        v = v.strip().lower()
        if v not in InquiryStatus.ALL:
            raise ValueError(f"Status must be one of: {', '.join(InquiryStatus.ALL)}")
        return v
