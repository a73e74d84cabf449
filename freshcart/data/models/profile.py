#freshcart/data/models/profile.py
from sqlalchemy import Column, String, ForeignKey, DateTime
from datetime import datetime, timezone

from freshcart.data.database import Base


class ProfileModel(Base):
    __tablename__ = "profiles"

    id = Column(String(64), ForeignKey("users.id"), primary_key=True)
    full_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    #adres trzymany w osobnych polach, nie jako jeden string
    street = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
