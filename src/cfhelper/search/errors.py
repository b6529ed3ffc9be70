"""Errors raised by the random problem picker."""


class EmptyPoolError(Exception):
    """Raised when there is nothing to pick from."""


class CatalogEmptyError(EmptyPoolError):
    """Raised when the catalog has not been downloaded yet."""


class FilterEmptyError(EmptyPoolError):
    """Raised when no catalog problem survives the filter and exclusions."""
