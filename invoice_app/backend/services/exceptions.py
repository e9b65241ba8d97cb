"""
Shared exceptions for the storage adapters.
"""


class StoreError(Exception):
    """Raised when a document or blob store operation fails."""

    pass


class NotFoundError(StoreError):
    """Raised when no stored object matches the requested id."""

    pass
