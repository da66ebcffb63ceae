from decimal import Decimal
from pydantic import BaseModel, field_validator
from typing import Optional

from app.models.vehicle import VehicleStatus


def _check_status(v):
    if v is None:
        return v
    v = v.strip().lower()
    if v not in VehicleStatus.ALL:
        raise ValueError(f"Status must be one of: {', '.join(VehicleStatus.ALL)}")
    return v


# ─── Requests ─────────────────────────────────────────────────────────────────
class VehicleCreateRequest(BaseModel):
    brand:        str
    model:        str
    year:         int
    price:        Decimal
    mileage:      int
    fuelType:     str
    transmission: str
    power:        str
    description:  Optional[str] = None
    status:       str = VehicleStatus.AVAILABLE

    @field_validator("brand", "model", "fuelType", "transmission", "power")
    @classmethod
    def check_not_blank(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("year")
    @classmethod
    def check_year(cls, v):
        if not (1900 <= v <= 2100): raise ValueError("Year must be between 1900 and 2100")
        return v

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        if v < 0: raise ValueError("Price cannot be negative")
        return v

    @field_validator("mileage")
    @classmethod
    def check_mileage(cls, v):
        if v < 0: raise ValueError("Mileage cannot be negative")
        return v

    @field_validator("description")
    @classmethod
    def empty_description(cls, v):
        if v is None: return None
        return v.strip() or None

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        if v is None or not str(v).strip(): return VehicleStatus.AVAILABLE
        return _check_status(v)


class VehicleUpdateRequest(BaseModel):
    brand:        Optional[str]     = None
    model:        Optional[str]     = None
    year:         Optional[int]     = None
    price:        Optional[Decimal] = None
    mileage:      Optional[int]     = None
    fuelType:     Optional[str]     = None
    transmission: Optional[str]     = None
    power:        Optional[str]     = None
    description:  Optional[str]     = None
    status:       Optional[str]     = None
    features:     Optional[list[str]] = None   # replaces the whole list when given

    @field_validator("brand", "model", "fuelType", "transmission", "power")
    @classmethod
    def check_not_blank(cls, v):
        if v is None: return None
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("year")
    @classmethod
    def check_year(cls, v):
        if v is not None and not (1900 <= v <= 2100): raise ValueError("Year must be between 1900 and 2100")
        return v

    @field_validator("price", "mileage")
    @classmethod
    def check_non_negative(cls, v):
        if v is not None and v < 0: raise ValueError("Value cannot be negative")
        return v

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return _check_status(v)


class VehicleStatusRequest(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return _check_status(v)
