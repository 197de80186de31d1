"""
Persistent storage collaborator for checkpoints
"""

from .storage import MemoryStorage, Storage, from_word, slot, slot_offset, to_word

__all__ = [
    "Storage",
    "MemoryStorage",
    "slot",
    "slot_offset",
    "to_word",
    "from_word",
]
