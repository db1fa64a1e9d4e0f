"""Error types shared by the resolver, navigation engine and collaborators."""


class ResolutionError(Exception):
    """Base class for failures while resolving a page configuration."""

    pass


class NotFoundError(ResolutionError):
    """Raised when no page matches the requested slug."""

    pass


class EmptyResultError(ResolutionError):
    """Raised when resolution produced a structurally invalid tree."""

    pass


class MissingStreamError(ResolutionError):
    """Raised when a resolved item has no playable stream, even after fallback."""

    pass


class ExternalServiceError(Exception):
    """Raised when an external collaborator (feed, LLM provider) fails.

    Attributes:
        imported: Number of catalog items already added before the failure
                  (ingestion only).
    """

    def __init__(self, message: str, imported: int = 0):
        super().__init__(message)
        self.imported = imported
