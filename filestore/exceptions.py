"""Custom exception classes for the storage engine."""


class StorageError(Exception):
    """
    Base exception class for all storage engine errors.
    """
    pass


class FileNotFoundError(StorageError):
    """
    Raised when an operation references a file name that is not stored.
    """
    pass


class FileAlreadyExistsError(StorageError):
    """
    Raised when creating a file whose name is already taken.

    Uploads replace existing files, so no current operation raises this.
    """
    pass


class InvalidOperationError(StorageError):
    """
    Raised when a request is not valid for the current state of a file.
    """
    pass


class StorageLimitError(StorageError):
    """
    Raised when content exceeds the per-file cap or the total capacity.
    """
    pass


class InvalidFileTypeError(StorageError):
    """
    Raised when a file type is rejected.
    """
    pass


class StorageSystemError(StorageError):
    """
    Raised when the engine detects an internal inconsistency or is unavailable.
    """
    pass
