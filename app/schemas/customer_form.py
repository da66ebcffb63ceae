from decimal import Decimal
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional


class CustomerFormCreateRequest(BaseModel):
    contactName:  str
    email:        EmailStr
    phone:        Optional[str]     = None
    brand:        str
    model:        str
    year:         Optional[int]     = None
    mileage:      Optional[int]     = None
    price:        Optional[Decimal] = None
    fuelType:     Optional[str]     = None
    transmission: Optional[str]     = None
    power:        Optional[str]     = None
    description:  Optional[str]     = None

    @field_validator("contactName", "brand", "model")
    @classmethod
    def check_not_blank(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("mileage", "price")
    @classmethod
    def check_non_negative(cls, v):
        if v is not None and v < 0: raise ValueError("Value cannot be negative")
        return v
