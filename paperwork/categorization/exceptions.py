class CategorizationError(Exception):
    """Raised when document categorization fails."""


class MalformedCategorizationError(CategorizationError):
    """Raised when the provider never returned a valid categorization payload."""
