from __future__ import annotations


class SocialGraphError(Exception):
    """Base class for failures raised by the account & graph store."""

    code = "INTERNAL_SERVER_ERROR"


class NotFoundError(SocialGraphError, LookupError):
    code = "NOT_FOUND"


class InvalidCredentialsError(SocialGraphError):
    code = "INVALID_CREDENTIALS"


class InvalidInputError(SocialGraphError, ValueError):
    code = "BAD_USER_INPUT"
