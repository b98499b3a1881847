"""Upload validation, storage naming and image derivatives."""

from __future__ import annotations

import logging
import re
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from flask import current_app
from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage, MultiDict

from storage import AbstractStorage, LocalStorage
from utils.errors import UploadError

logger = logging.getLogger(__name__)

IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"})
DOCUMENT_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
    }
)
ALLOWED_TYPES = IMAGE_TYPES | DOCUMENT_TYPES

# name, filename suffix, bounding box edge, WebP quality
IMAGE_VARIANTS = (
    ("thumbnail", "_thumb", 150, 80),
    ("medium", "_medium", 500, 80),
    ("large", "_large", 1200, 80),
)
WEBP_QUALITY = 90
DERIVED_SUFFIXES = tuple(suffix for _, suffix, _, _ in IMAGE_VARIANTS) + ("",)

_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass
class StoredFile:
    original_name: str
    filename: str
    mimetype: str
    size: int
    url: str
    processed_versions: dict[str, str] | None = None
    webp_url: str | None = None

    @property
    def is_image(self) -> bool:
        return self.mimetype in IMAGE_TYPES

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "originalName": self.original_name,
            "filename": self.filename,
            "mimetype": self.mimetype,
            "size": self.size,
            "url": self.url,
        }
        if self.processed_versions is not None:
            data["processedVersions"] = self.processed_versions
            data["webpUrl"] = self.webp_url
        return data


@dataclass
class UploadService:
    storage: AbstractStorage
    max_file_size: int = 5 * 1024 * 1024
    max_files: int = 5
    _clock: Any = field(default=time.time, repr=False)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "UploadService":
        return cls(
            storage=LocalStorage(config["UPLOAD_DIR"]),
            max_file_size=int(config.get("MAX_FILE_SIZE", 5 * 1024 * 1024)),
            max_files=int(config.get("MAX_FILES", 5)),
        )

    # Validation

    def collect(
        self,
        files: MultiDict,
        field_name: str,
        *,
        max_count: int = 1,
        missing_message: str = "No file uploaded",
    ) -> list[FileStorage]:
        """Return the files sent under ``field_name`` after every check passes."""

        for key in files.keys():
            if key != field_name:
                raise UploadError(
                    f"Unexpected field name. Expected: {field_name}", "UNEXPECTED_FIELD"
                )

        uploads = [item for item in files.getlist(field_name) if item and item.filename]
        if not uploads:
            raise UploadError(missing_message, "NO_FILE")
        if len(uploads) > min(max_count, self.max_files):
            raise UploadError(
                f"Too many files. Maximum is {min(max_count, self.max_files)}.",
                "TOO_MANY_FILES",
            )

        for upload in uploads:
            self._check(upload)
        return uploads

    def _check(self, upload: FileStorage) -> None:
        mimetype = upload.mimetype
        if mimetype not in ALLOWED_TYPES:
            raise UploadError(f"File type {mimetype} is not allowed", "INVALID_FILE_TYPE")

        if _stream_size(upload) > self.max_file_size:
            limit_mb = round(self.max_file_size / (1024 * 1024), 2)
            raise UploadError(
                f"File too large. Maximum size is {limit_mb:g}MB.", "FILE_TOO_LARGE"
            )

    @staticmethod
    def require_images(uploads: list[FileStorage], message: str) -> None:
        for upload in uploads:
            if upload.mimetype not in IMAGE_TYPES:
                raise UploadError(message, "INVALID_FILE_TYPE")

    # Storage

    def stored_name(self, field_name: str, original_name: str) -> str:
        """``<field>-<epoch ms>-<uuid4><ext>``."""

        extension = Path(original_name).suffix
        if not _EXTENSION_RE.match(extension):
            extension = ""
        return f"{field_name}-{int(self._clock() * 1000)}-{uuid.uuid4()}{extension}"

    def store(self, upload: FileStorage, field_name: str) -> StoredFile:
        mimetype = upload.mimetype
        size = _stream_size(upload)
        filename = self.stored_name(field_name, upload.filename or "")
        category = "images" if mimetype in IMAGE_TYPES else "documents"
        url = self.storage.save(upload, category, filename)
        stored = StoredFile(
            original_name=upload.filename or filename,
            filename=filename,
            mimetype=mimetype,
            size=size,
            url=url,
        )
        if stored.is_image:
            stored.processed_versions = self._process_image(filename, url)
            stored.webp_url = stored.processed_versions["webp"]
        logger.info("File uploaded: %s as %s", stored.original_name, filename)
        return stored

    def store_all(self, uploads: list[FileStorage], field_name: str) -> list[StoredFile]:
        return [self.store(upload, field_name) for upload in uploads]

    def _process_image(self, filename: str, url: str) -> dict[str, str]:
        source = self.storage.path_for("images", filename)
        stem = Path(filename).stem
        versions = {"original": url}
        try:
            with Image.open(source) as image:
                image.load()
                for name, suffix, edge, quality in IMAGE_VARIANTS:
                    variant = image.copy()
                    # thumbnail() keeps the aspect ratio and never enlarges.
                    variant.thumbnail((edge, edge), Image.Resampling.LANCZOS)
                    versions[name] = self._save_webp(variant, f"{stem}{suffix}.webp", quality)
                if source.suffix.lower() == ".webp":
                    versions["webp"] = url
                else:
                    versions["webp"] = self._save_webp(image, f"{stem}.webp", WEBP_QUALITY)
        except (UnidentifiedImageError, OSError) as exc:
            logger.error("Image processing error for %s: %s", filename, exc)
            self.delete("images", filename)
            raise UploadError("Uploaded image could not be processed", "INVALID_FILE_TYPE") from exc

        logger.info("Image processed: %s", filename)
        return versions

    def _save_webp(self, image: Image.Image, filename: str, quality: int) -> str:
        if image.mode not in ("RGB", "RGBA"):
            has_alpha = image.mode in ("LA", "PA") or "transparency" in image.info
            image = image.convert("RGBA" if has_alpha else "RGB")
        image.save(self.storage.path_for("images", filename), "WEBP", quality=quality)
        return f"/uploads/images/{filename}"

    def delete(self, category: str, filename: str) -> bool:
        """Delete a file and, for images, every derived WebP file."""

        removed = self.storage.delete(category, filename)
        if category == "images":
            stem = Path(filename).stem
            for suffix in DERIVED_SUFFIXES:
                derived = f"{stem}{suffix}.webp"
                if derived != filename:
                    self.storage.delete("images", derived)
            logger.info("Processed images deleted for: %s", filename)
        return removed

    def info(self, category: str, filename: str) -> dict | None:
        return self.storage.info(category, filename)

    def stats(self) -> dict:
        return self.storage.stats()


def _stream_size(upload: FileStorage) -> int:
    stream = upload.stream
    position = stream.tell()
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(position)
    return size


def get_upload_service() -> UploadService:
    return current_app.extensions["upload_service"]
