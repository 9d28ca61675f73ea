class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class NotFoundError(ProcessorError):
    """Raised when a document or its stored file cannot be found."""


class DocumentNotFoundError(NotFoundError):
    """Raised when a document cannot be found in the database."""


class StorageKeyNotFoundError(NotFoundError):
    """Raised when no stored file exists for a storage key."""


class MissingStorageKeyError(ProcessorError):
    """Raised when a document has no storage key to read its file from."""


class DocumentBusyError(ProcessorError):
    """Raised when a run for the same document is already in flight."""


class ProcessingFailedError(ProcessorError):
    """Raised for any other failure during a processing run."""
