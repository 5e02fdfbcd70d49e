"""Domain errors raised by the practice engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class VocabularyEngineError(Exception):
    """Base error carrying a machine readable ``code`` and an HTTP status."""

    code: str
    status_code: int = 400

    def __str__(self) -> str:  # pragma: no cover - human readable message
        return self.code


@dataclass(eq=False)
class VocabularyNotFound(VocabularyEngineError):
    code: str = "vocabulary_not_found"
    status_code: int = 404


@dataclass(eq=False)
class InvalidPracticeInput(VocabularyEngineError):
    status_code: int = 400


@dataclass(eq=False)
class ConcurrentUpdateError(VocabularyEngineError):
    code: str = "concurrent_update"
    status_code: int = 409


__all__ = [
    "ConcurrentUpdateError",
    "InvalidPracticeInput",
    "VocabularyEngineError",
    "VocabularyNotFound",
]
