from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP
from sqlalchemy.sql import func
from app.database import Base


class AdminUser(Base):
    __tablename__ = "admin_users"

    id        = Column(Integer, primary_key=True, index=True)
    username  = Column(String(100), unique=True, nullable=False, index=True)
    password  = Column(String(255), nullable=False)
    isActive  = Column("isActive", Boolean, default=True, nullable=False)
    createdAt = Column("createdAt", TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt = Column("updatedAt", TIMESTAMP(timezone=True), server_default=func.now(),
                       onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<AdminUser id={self.id} username={self.username}>"
