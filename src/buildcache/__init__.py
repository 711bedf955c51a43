"""Content-addressed file store for build-artifact caches."""

from .hashing.hash_code import HashCode
from .store import (
    DefaultHashFileStore,
    FillError,
    HashFileStore,
    HashFileStoreError,
    InitializationError,
    RacePolicy,
)

__version__ = "0.1.0"

__all__ = [
    "DefaultHashFileStore",
    "FillError",
    "HashCode",
    "HashFileStore",
    "HashFileStoreError",
    "InitializationError",
    "RacePolicy",
]
