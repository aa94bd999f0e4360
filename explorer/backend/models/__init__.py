# SQLAlchemy models package
from explorer.backend.models.base import Base
from explorer.backend.models.review import Review
from explorer.backend.models.user import User

__all__ = ["Base", "Review", "User"]
