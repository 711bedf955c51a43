import binascii
from typing import Union


class HashCode:
    """
    Opaque content digest used as a store key.

    The canonical form is lowercase hex, which is always a valid file name.
    """

    __slots__ = ("_bytes",)

    def __init__(self, digest: bytes):
        if not digest:
            raise ValueError("Hash code must not be empty")
        self._bytes = bytes(digest)

    @classmethod
    def from_bytes(cls, digest: Union[bytes, bytearray]) -> "HashCode":
        return cls(bytes(digest))

    @classmethod
    def from_hex(cls, text: str) -> "HashCode":
        text = text.strip()
        if not text or len(text) % 2:
            raise ValueError(f"Invalid hash code: {text!r}")
        try:
            return cls(binascii.unhexlify(text))
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid hash code: {text!r}") from e

    def to_bytes(self) -> bytes:
        return self._bytes

    def to_hex(self) -> str:
        return self._bytes.hex()

    def __len__(self) -> int:
        return len(self._bytes)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"HashCode({self.to_hex()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, HashCode):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)
