class ExtractionError(Exception):
    """Raised when structured field extraction fails."""


class MalformedExtractionError(ExtractionError):
    """Raised when the provider response is not a valid extraction payload."""
