"""Domain errors raised by the mutation service and mapped to HTTP by main.py."""

from __future__ import annotations


class MuralError(Exception):
    """Base class for errors that surface to the client as {"error": message}."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MuralError):
    """A required field is missing or empty."""

    status_code = 400


class NotFoundError(MuralError):
    """An id does not resolve to a post or comment."""

    status_code = 404
