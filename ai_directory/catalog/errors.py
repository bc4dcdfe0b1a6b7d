"""
Error types raised by the catalogue.

Route handlers never build error responses by hand; they raise one of
these and the exception handlers registered in ``main.py`` translate
them into JSON responses with the matching status code.
"""

from typing import Any, Optional


class CatalogError(Exception):
    """Base class for every error the catalogue raises on purpose."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    """An entity is missing on update/delete, or a join target is missing."""

    status_code = 404


class CatalogValidationError(CatalogError):
    """Submitted fields are missing or out of range."""

    status_code = 400


class ConflictError(CatalogError):
    """A submission collides with an existing record.

    ``duplicate`` carries the existing record so that clients can link
    to it instead of re-submitting.
    """

    status_code = 409

    def __init__(self, message: str, duplicate: Optional[Any] = None) -> None:
        super().__init__(message)
        self.duplicate = duplicate


class UpstreamFailure(CatalogError):
    """The external ranking service failed or returned unusable data.

    Never surfaced to clients: the search pipeline converts it into the
    ``error`` field of a successful response.
    """

    status_code = 502
