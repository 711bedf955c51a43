class HashFileStoreError(Exception):
    """Base class for errors raised by the hash file store."""


class InitializationError(HashFileStoreError):
    """The store's base directory could not be established."""


class FillError(HashFileStoreError):
    """
    A fill action failed with something other than an OSError.

    The original exception is chained as __cause__.
    """

    def __init__(self, message: str, key=None):
        super().__init__(message)
        self.key = key
