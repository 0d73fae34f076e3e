"""Errors raised by the utility layer."""


class UtilError(Exception):
    pass


class NotAuthenticatedError(UtilError):
    """Raised when a request carries no valid session token."""

    pass
