from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from werkzeug.utils import secure_filename

from ..errors import ImageNotFoundError, InvalidFilenameError
from ..processing.codec import IMAGE_EXTENSIONS

log = logging.getLogger(__name__)

ImageEntry = Dict[str, str]


class ImageStore:
    """Flat directory of images served under ``url_prefix``."""

    def __init__(self, root: Path, kind: str, url_prefix: str) -> None:
        self.root = Path(root)
        self.kind = kind
        self.url_prefix = url_prefix.rstrip("/")

    def path_for(self, name: str) -> Path:
        if not name or secure_filename(name) != name:
            raise InvalidFilenameError("Unsafe file name", {"filename": name})
        if Path(name).suffix.lower() not in IMAGE_EXTENSIONS:
            raise InvalidFilenameError("Not an image file name", {"filename": name})
        return self.root / name

    def url_for(self, name: str) -> str:
        return f"{self.url_prefix}/{name}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str) -> bytes:
        path = self.path_for(name)
        if not path.is_file():
            raise ImageNotFoundError(f"{self.kind.capitalize()} image not found", {"filename": name})
        return path.read_bytes()

    def save(self, name: str, data: bytes) -> Path:
        path = self.path_for(name)
        self.root.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        log.info("Saved %s image %s (%d bytes)", self.kind, path, len(data))
        return path

    def list_images(self) -> List[ImageEntry]:
        if not self.root.is_dir():
            return []
        return [
            {"name": path.name, "url": self.url_for(path.name), "type": self.kind}
            for path in sorted(self.root.iterdir())
            if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS
        ]


def gallery(screenshots: ImageStore, processed: ImageStore) -> Dict[str, List[ImageEntry]]:
    return {
        "screenshots": screenshots.list_images(),
        "processed": processed.list_images(),
    }
