"""
Storage Module - Word repositories consumed by callers of the engine.
"""

from wordgym.storage.repository import (
    InMemoryWordRepository,
    JsonWordRepository,
    WordRepository,
)

__all__ = [
    "WordRepository",
    "InMemoryWordRepository",
    "JsonWordRepository",
]
