from sqlalchemy import Column, String, Boolean
from freshcart.data.database import Base

class UserModel(Base):
    __tablename__ = "users"
    id = Column(String(64), primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
