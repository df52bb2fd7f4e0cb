from .errors import InvalidCredentialsError, InvalidInputError, NotFoundError, SocialGraphError
from .passwords import PasswordHasher
from .store import AccountGraphStore, Post, User

__all__ = [
    "AccountGraphStore",
    "InvalidCredentialsError",
    "InvalidInputError",
    "NotFoundError",
    "PasswordHasher",
    "Post",
    "SocialGraphError",
    "User",
]
