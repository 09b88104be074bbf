"""Catalog error taxonomy.

Raised by the validators and the product service; rendered into
``{"error": ...}`` JSON bodies by the handlers registered in ``main``.
"""
from typing import Optional


class CatalogError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(CatalogError):
    """The request cannot be served as sent."""
    status_code = 400


class ValidationError(BadRequestError):
    """Client input is malformed or missing."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(CatalogError):
    """The identifier does not resolve to a row."""
    status_code = 404


class InternalError(CatalogError):
    """Storage or other unexpected fault."""
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details
