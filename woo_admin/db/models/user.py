from sqlalchemy import Column, Integer, String, Text, DateTime, func
from woo_admin.db.base import Base

class User(Base):
    """A shop administrator (tenant) and the WooCommerce store it manages."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(Text, nullable=True)
    # Legacy column, read only when hashed_password is empty
    password = Column(Text, nullable=True)
    woo_url = Column(String(255), nullable=True)
    woo_ck = Column(String(255), nullable=True)
    woo_cs = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
