class OcrError(Exception):
    """Base exception for text extraction failures."""


class UnsupportedMediaTypeError(OcrError):
    """Raised when a document's media type cannot be turned into text."""
