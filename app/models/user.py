"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """Account that can author reviews."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email_address = Column(String(255), nullable=False, unique=True, index=True)
    password_digest = Column(String(255), nullable=False)

    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan")
