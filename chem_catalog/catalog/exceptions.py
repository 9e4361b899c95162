"""
Exceptions raised by the catalog store and its collaborators.

Lookups never raise: a missing record is an empty result. Only the
add-record flow and the I/O collaborators signal failures.
"""

from typing import Optional


class CatalogError(Exception):
    """Base exception for catalog errors."""

    pass


class ValidationFailure(CatalogError):
    """A record was rejected: a required field is missing or a field is malformed."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Missing required field: {field}")


class CatalogWriteError(CatalogError):
    """Writing a collection to storage failed."""

    pass


class PersistenceFailure(CatalogWriteError):
    """The persistence collaborator could not store an appended collection."""

    pass


class SourceUnavailable(CatalogError):
    """A catalog source (file, URL or stored collection) could not be read."""

    pass
