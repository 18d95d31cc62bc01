from sqlalchemy import Column, String, DateTime, func
from woo_admin.db.base import Base

class PushToken(Base):
    __tablename__ = "push_tokens"

    token = Column(String(512), primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
