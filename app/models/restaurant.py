"""Restaurant model."""

from sqlalchemy import Column, Enum, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin
from app.models.enums import CuisineType


class Restaurant(TimestampMixin, Base):
    """Listed dining establishment."""

    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    cuisine_type = Column(
        Enum(
            CuisineType,
            name="cuisine_type",
            native_enum=False,
            length=32,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        index=True,
    )
    price_range = Column(Integer, nullable=False, index=True)  # 1=budget .. 3=upscale
    address = Column(Text)
    description = Column(Text)
    phone = Column(String(50))
    image_url = Column(Text)

    reviews = relationship(
        "Review",
        back_populates="restaurant",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Restaurant id={self.id} name={self.name!r}>"
