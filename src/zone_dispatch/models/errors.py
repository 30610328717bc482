"""Exceptions raised by the dispatch engine and its repositories."""


class CoordinateValidationError(ValueError):
    """Raised for malformed or out-of-range coordinates and radii."""


class RepositoryError(RuntimeError):
    """Raised when zone or restaurant records cannot be read from storage."""
