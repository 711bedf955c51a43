from .errors import FillError, HashFileStoreError, InitializationError
from .hash_file_store import DefaultHashFileStore, HashFileStore, RacePolicy

__all__ = [
    "DefaultHashFileStore",
    "FillError",
    "HashFileStore",
    "HashFileStoreError",
    "InitializationError",
    "RacePolicy",
]
