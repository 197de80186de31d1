"""
Key-addressed word storage for persisted checkpoints.

The fixed-point library and the accumulators only ever touch persistent state
through the two-call `Storage` protocol below. Keys are opaque 32-byte
strings; words are unsigned 256-bit integers. Signed values are stored in
two's complement.
"""

from __future__ import annotations

import hashlib
from typing import Dict, Protocol, runtime_checkable


Key = bytes  # 32-byte slot identifier
Word = int  # unsigned 256-bit integer

KEY_BYTES = 32
WORD_BITS = 256
WORD_MAX = (1 << WORD_BITS) - 1


@runtime_checkable
class Storage(Protocol):
    def read(self, key: Key) -> Word: ...

    def write(self, key: Key, word: Word) -> None: ...


def _check_key(key: Key) -> None:
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError("storage key must be bytes")
    if len(key) != KEY_BYTES:
        raise ValueError(f"storage key must be {KEY_BYTES} bytes, got {len(key)}")


def _check_word(word: Word) -> None:
    if not isinstance(word, int) or isinstance(word, bool):
        raise TypeError("storage word must be an int")
    if not (0 <= word <= WORD_MAX):
        raise ValueError(f"storage word out of range: {word}")


class MemoryStorage:
    """
    Dict-backed `Storage`.

    Unwritten keys read as 0, so a freshly created checkpoint reads as the
    zero value of its type.
    """

    def __init__(self) -> None:
        self._words: Dict[bytes, Word] = {}

    def read(self, key: Key) -> Word:
        _check_key(key)
        return self._words.get(bytes(key), 0)

    def write(self, key: Key, word: Word) -> None:
        _check_key(key)
        _check_word(word)
        if word == 0:
            # Keep the table sparse; reads of missing keys return 0 anyway.
            self._words.pop(bytes(key), None)
        else:
            self._words[bytes(key)] = word

    def __len__(self) -> int:
        return len(self._words)


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """
    Create a domain separation prefix.

    The output is ASCII-only and NUL-terminated to make concatenation unambiguous.
    """
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label:
        raise ValueError("label must not contain NUL")
    try:
        label_bytes = label.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError("label must be ASCII") from exc
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"fundcore:" + label_bytes + b":v" + str(version).encode("ascii") + b"\x00"


def slot(label: str) -> Key:
    """Deterministic 32-byte key for a named checkpoint."""
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    return hashlib.sha256(domain_sep_bytes("slot") + label.encode("utf-8")).digest()


def slot_offset(key: Key, offset: int) -> Key:
    """The key `offset` positions after `key`, wrapping at 2**256."""
    _check_key(key)
    if not isinstance(offset, int) or isinstance(offset, bool) or offset < 0:
        raise ValueError(f"offset must be a non-negative int, got {offset!r}")
    n = (int.from_bytes(key, "big") + offset) & WORD_MAX
    return n.to_bytes(KEY_BYTES, "big")


def to_word(raw: int, signed: bool) -> Word:
    """Encode a raw integer as a storage word (two's complement when signed)."""
    if signed:
        if not (-(1 << (WORD_BITS - 1)) <= raw < (1 << (WORD_BITS - 1))):
            raise ValueError(f"signed value does not fit a storage word: {raw}")
        return raw & WORD_MAX
    _check_word(raw)
    return raw


def from_word(word: Word, signed: bool) -> int:
    """Decode a storage word; the inverse of `to_word`."""
    _check_word(word)
    if signed and word >> (WORD_BITS - 1):
        return word - (1 << WORD_BITS)
    return word
