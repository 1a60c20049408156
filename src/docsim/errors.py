"""Exceptions raised by the corpus similarity pipeline."""


class DocsimError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(DocsimError):
    """Raised for invalid caller-supplied settings (cluster count, linkage method, ...)."""


class DataIntegrityError(DocsimError):
    """Raised when similarity data feeding the distance matrix is incomplete or contradictory."""

    def __init__(self, message: str, pairs: list[tuple[str, str]] | None = None):
        super().__init__(message)
        self.pairs = pairs or []


class MissingKeyError(DocsimError):
    """Raised when a key present in one table is absent from another at join time."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []
