# products/services/exceptions.py

"""
CATALOG DOMAIN EXCEPTIONS

These are raised by catalog services and translated to
{"error": {"code", "message"}} responses by the views.
"""


class CatalogError(Exception):
    """Base exception for catalog services."""


class InsufficientStockError(CatalogError):
    """Requested quantity exceeds product stock."""


class ProductUnavailableError(CatalogError):
    """Product is inactive or does not exist."""


class ImportFileError(CatalogError):
    """Uploaded spreadsheet could not be read at all."""


class MediaValidationError(CatalogError):
    """Uploaded image/video failed type or size validation."""
