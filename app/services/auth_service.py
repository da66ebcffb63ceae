import logging

from sqlalchemy.orm import Session

from app.models.admin_user import AdminUser
from app.schemas.auth import LoginRequest, AdminOut, TokenOut
from app.utils.security import verify_password, hash_password, create_access_token
from app.utils.exceptions import UnauthorizedException, AccountInactiveException

logger = logging.getLogger(__name__)


class AuthService:

    # ─── Login ────────────────────────────────────────────────────────────────
    def login(self, db: Session, data: LoginRequest) -> dict:
        admin = db.query(AdminUser).filter(AdminUser.username == data.username).first()

        if not admin or not verify_password(data.password, admin.password):
            logger.warning(f"Failed admin login for '{data.username}'")
            raise UnauthorizedException("Invalid username or password")

        if not admin.isActive:
            raise AccountInactiveException()

        token, expires_in = create_access_token(admin.id)
        logger.info(f"Admin '{admin.username}' logged in")
        return TokenOut(
            accessToken=token,
            expiresIn=expires_in,
            admin=AdminOut.model_validate(admin),
        ).model_dump()

    # ─── Account management (CLI) ─────────────────────────────────────────────
    def create_or_reset_admin(self, db: Session, username: str, password: str) -> tuple[AdminUser, bool]:
        """Returns (admin, created). An existing account gets a new password and is re-activated."""
        admin = db.query(AdminUser).filter(AdminUser.username == username).first()
        created = admin is None
        if created:
            admin = AdminUser(username=username, password=hash_password(password), isActive=True)
            db.add(admin)
        else:
            admin.password = hash_password(password)
            admin.isActive = True
        db.commit()
        db.refresh(admin)
        return admin, created


auth_service = AuthService()
