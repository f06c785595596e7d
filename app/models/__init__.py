from app.models.user import User
from app.models.meal import Meal

__all__ = ["User", "Meal"]
