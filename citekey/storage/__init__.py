"""Entry collections for key generation."""

from citekey.storage.memory import MemoryEntryStore

__all__ = ["MemoryEntryStore"]
