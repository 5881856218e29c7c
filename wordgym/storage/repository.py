"""
Word repositories.

The engine never touches storage. Callers read a lesson's words before
building a session and save the scheduler's output after each answer,
through the WordRepository protocol.

Implementations:
- InMemoryWordRepository: dict-backed, for tests and embedding callers
- JsonWordRepository: a single JSON document, read on demand and
  rewritten on every save

File Structure:
    {
        "lessons": {
            "<lesson_id>": [<word>, ...]
        }
    }
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from loguru import logger

from wordgym.core.models import WordItem


class WordRepository(Protocol):
    def list_words(self, lesson_id: str) -> list[WordItem]:
        """All words of a lesson; empty for an unknown lesson."""
        ...

    def save_word(self, word: WordItem) -> None:
        """Insert or replace a word in its lesson."""
        ...


def _require_lesson(word: WordItem) -> str:
    if not word.lesson_id:
        raise ValueError(f"Word {word.id} has no lesson_id and cannot be saved")
    return word.lesson_id


# =============================================================================
# In-memory
# =============================================================================


class InMemoryWordRepository:
    """Dict-backed repository. Preserves insertion order within a lesson."""

    def __init__(self, words: Iterable[WordItem] = ()):
        self._lessons: dict[str, dict[str, WordItem]] = {}
        for word in words:
            self.save_word(word)

    def list_words(self, lesson_id: str) -> list[WordItem]:
        return list(self._lessons.get(lesson_id, {}).values())

    def save_word(self, word: WordItem) -> None:
        lesson_id = _require_lesson(word)
        self._lessons.setdefault(lesson_id, {})[word.id] = word

    def lessons(self) -> list[str]:
        return sorted(self._lessons)


# =============================================================================
# JSON file
# =============================================================================


class JsonWordRepository:
    """
    JSON-file repository.

    The file is re-read for every call so that each session starts from
    the current on-disk state. A missing file behaves as an empty store.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"lessons": {}}
        with self.path.open(encoding="utf-8") as f:
            data = json.load(f)
        data.setdefault("lessons", {})
        return data

    def _dump(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp.replace(self.path)

    def list_words(self, lesson_id: str) -> list[WordItem]:
        raw = self._load()["lessons"].get(lesson_id, [])
        return [WordItem.from_dict({**item, "lesson_id": lesson_id}) for item in raw]

    def save_word(self, word: WordItem) -> None:
        lesson_id = _require_lesson(word)
        data = self._load()
        items = data["lessons"].setdefault(lesson_id, [])

        record = word.to_dict()
        for i, item in enumerate(items):
            if item.get("id") == word.id:
                items[i] = record
                break
        else:
            items.append(record)

        self._dump(data)
        logger.debug(f"Saved {word.id} to lesson {lesson_id} in {self.path}")

    def lessons(self) -> list[str]:
        return sorted(self._load()["lessons"])
