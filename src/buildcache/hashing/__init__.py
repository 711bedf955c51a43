from .hash_code import HashCode

__all__ = ["HashCode"]
