"""
Errors raised by the wishlist services.

Each error carries the HTTP status the API layer responds with.
"""


class WishlistError(Exception):
    """Base error for wishlist operations."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InvalidRequestError(WishlistError):
    """A required field is missing or invalid."""
    status_code = 400


class CsvParseError(InvalidRequestError):
    """CSV text could not be parsed."""
    pass


class NotFoundError(WishlistError):
    """The requested person or item does not exist."""
    status_code = 404


class ConflictError(WishlistError):
    """A person with the same code already exists."""
    status_code = 409


class StorageError(WishlistError):
    """Reading or writing the data file failed."""
    status_code = 500
