"""Local filesystem storage implementation."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import IO

from werkzeug.utils import secure_filename

from .abstract_storage import CATEGORIES, AbstractStorage

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
DOCUMENT_EXTENSIONS = (".pdf", ".doc", ".docx", ".txt")
_MB = 1024 * 1024


def _timestamp(epoch: float) -> str:
    return datetime.fromtimestamp(epoch, UTC).isoformat()


class LocalStorage(AbstractStorage):
    """Persist files under ``<upload_dir>/images`` and ``<upload_dir>/documents``."""

    def __init__(self, upload_dir: str | os.PathLike):
        self.base_directory = Path(upload_dir)
        for category in CATEGORIES:
            os.makedirs(self.base_directory / category, exist_ok=True)

    def _check_category(self, category: str) -> None:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown storage category: {category}")

    def path_for(self, category: str, filename: str) -> Path:
        self._check_category(category)
        safe_name = secure_filename(filename)
        if not safe_name or safe_name != filename:
            raise ValueError("Filename must not contain path components.")
        return self.base_directory / category / safe_name

    @staticmethod
    def url_for(category: str, filename: str) -> str:
        return f"/uploads/{category}/{filename}"

    def save(self, file_obj: IO[bytes], category: str, filename: str) -> str:
        """Save a file and return the URL it is served under."""

        destination = self.path_for(category, filename)
        if hasattr(file_obj, "save"):
            file_obj.save(destination)  # type: ignore[arg-type]
        else:
            with open(destination, "wb") as output:
                output.write(file_obj.read())
        return self.url_for(category, filename)

    def exists(self, category: str, filename: str) -> bool:
        try:
            return self.path_for(category, filename).is_file()
        except ValueError:
            return False

    def delete(self, category: str, filename: str) -> bool:
        """Remove a file. Filesystem errors are logged, never raised."""

        try:
            path = self.path_for(category, filename)
            if not path.is_file():
                return False
            path.unlink()
        except (OSError, ValueError) as exc:
            logger.error("Error deleting file %s/%s: %s", category, filename, exc)
            return False
        logger.info("File deleted: %s/%s", category, filename)
        return True

    def info(self, category: str, filename: str) -> dict | None:
        if not self.exists(category, filename):
            return None
        stat = self.path_for(category, filename).stat()
        extension = Path(filename).suffix.lower()
        return {
            "exists": True,
            "size": stat.st_size,
            "created": _timestamp(stat.st_ctime),
            "modified": _timestamp(stat.st_mtime),
            "extension": extension,
            "isImage": extension in IMAGE_EXTENSIONS,
            "isDocument": extension in DOCUMENT_EXTENSIONS,
        }

    def _directory_stats(self, category: str) -> tuple[int, int]:
        count = total = 0
        for entry in (self.base_directory / category).iterdir():
            if entry.is_file():
                count += 1
                total += entry.stat().st_size
        return count, total

    def stats(self) -> dict:
        summary: dict = {}
        all_count = all_bytes = 0
        for category in CATEGORIES:
            count, size = self._directory_stats(category)
            all_count += count
            all_bytes += size
            summary[category] = _size_entry(count, size)
        summary["total"] = _size_entry(all_count, all_bytes)
        return summary


def _size_entry(count: int, size: int) -> dict:
    return {"count": count, "totalSize": size, "totalSizeMB": round(size / _MB, 2)}
