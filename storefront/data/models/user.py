from sqlalchemy import Column, String, Date, DateTime

from storefront.data.database import Base
from storefront.data.models.base import new_id, utcnow


class UserModel(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    fullname = Column(String(200), nullable=False)
    handle = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    mobile_number = Column(String(32), nullable=False, index=True)
    date_of_birth = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
