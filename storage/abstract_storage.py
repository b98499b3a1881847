"""Storage abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO

CATEGORIES = ("images", "documents")


class AbstractStorage(ABC):
    """Interface for upload storage backends.

    Files live in one of :data:`CATEGORIES` and are addressed by
    ``(category, filename)``.
    """

    @abstractmethod
    def save(self, file_obj: IO[bytes], category: str, filename: str) -> str:
        """Persist a file and return its public URL path."""

    @abstractmethod
    def path_for(self, category: str, filename: str) -> Path:
        """Return the local path of a stored file."""

    @abstractmethod
    def delete(self, category: str, filename: str) -> bool:
        """Remove a file; return whether it existed."""

    @abstractmethod
    def info(self, category: str, filename: str) -> dict | None:
        """Return size and timestamps, or ``None`` when missing."""

    @abstractmethod
    def stats(self) -> dict:
        """Return file counts and sizes per category and overall."""
