from pydantic import BaseModel, field_validator


# ─── Request Schemas ──────────────────────────────────────────────────────────
class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def strip_username(cls, v):
        if not v.strip(): raise ValueError("Username cannot be empty")
        return v.strip()


# ─── Response Schemas ─────────────────────────────────────────────────────────
class AdminOut(BaseModel):
    id:       int
    username: str
    isActive: bool
    model_config = {"from_attributes": True}


class TokenOut(BaseModel):
    accessToken: str
    tokenType:   str = "Bearer"
    expiresIn:   int
    admin:       AdminOut
