from .models import User, UserCreate

__all__ = ["User", "UserCreate"]
