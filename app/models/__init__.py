"""Import every model so metadata knows all tables."""

from app.models.restaurant import Restaurant  # noqa: F401
from app.models.review import Review  # noqa: F401
from app.models.user import User  # noqa: F401
