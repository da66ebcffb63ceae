from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.admin_user import AdminUser
from app.services.upload_service import UploadStore
from app.utils.security import verify_access_token
from app.utils.exceptions import (
    UnauthorizedException,
    AccountInactiveException,
)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


# ─── Get Current Admin ────────────────────────────────────────────────────────
def get_admin_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AdminUser:
    """
    Validate JWT Bearer token and return the current AdminUser.
    Raises 401 if token is missing, invalid, expired or the account is gone.
    Raises 403 if account is inactive.
    """
    if not credentials:
        raise UnauthorizedException("No authentication token provided")

    payload = verify_access_token(credentials.credentials)
    admin_id: str | None = payload.get("sub")

    if admin_id is None or payload.get("role") != "ADMIN":
        raise UnauthorizedException("Invalid token payload")

    admin = db.query(AdminUser).filter(AdminUser.id == int(admin_id)).first()
    if not admin:
        raise UnauthorizedException("Account no longer exists")

    if not admin.isActive:
        raise AccountInactiveException()

    return admin


# ─── Uploads ──────────────────────────────────────────────────────────────────
def get_upload_store() -> UploadStore:
    """
    Upload storage built from settings. Tests override this dependency
    to point the store at a temporary directory.
    """
    return UploadStore(
        directory=settings.UPLOAD_DIR,
        url_prefix=settings.UPLOAD_URL_PREFIX,
        max_size=settings.MAX_UPLOAD_SIZE,
        max_files=settings.MAX_UPLOAD_FILES,
    )


def get_base_url(request: Request) -> str:
    """Host that image paths are resolved against when building response URLs."""
    return settings.PUBLIC_BASE_URL or str(request.base_url)
