"""
Shared exceptions for extraction providers.
"""


class ExtractionError(Exception):
    """Raised when a provider reply cannot be turned into invoice fields."""

    pass
