from models.user import AuthSession, User

__all__ = [
    "AuthSession",
    "User",
]
