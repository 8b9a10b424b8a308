import logging
from pathlib import Path
from typing import Optional, Union

from app.config import settings
from app.services.upload_validate import EXTENSION_MIME_TYPES

log = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class PathTraversalError(ValueError):
    """Raised when a key resolves outside the uploads root."""


def content_type_for(name: str) -> str:
    suffix = Path(name).suffix.lower().lstrip(".")
    return EXTENSION_MIME_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)


class LocalStorage:
    def __init__(self, root: Optional[Union[str, Path]] = None):
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path:
        # Read lazily so tests can point UPLOADS_DIR at a tmp dir
        base = self._root if self._root is not None else Path(settings.UPLOADS_DIR)
        return base.resolve()

    def resolve(self, key: str) -> Path:
        root = self.root
        if "\x00" in key:
            raise PathTraversalError(f"Invalid upload key: {key!r}")
        try:
            path = (root / key).resolve()
        except ValueError as exc:
            raise PathTraversalError(f"Invalid upload key: {key!r}") from exc
        if path != root and root not in path.parents:
            raise PathTraversalError(f"Path escapes uploads root: {key}")
        return path

    def save(self, filename: str, data: bytes) -> str:
        path = self.resolve(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError:
            # No truncated file may stay behind under a servable name
            path.unlink(missing_ok=True)
            raise
        log.info("Stored upload %s (%d bytes)", filename, len(data))
        return str(path.relative_to(self.root))

    def read(self, key: str) -> bytes:
        return self.resolve(key).read_bytes()

    def exists(self, key: str) -> bool:
        path = self.resolve(key)
        return path.is_file()

    def delete(self, key: str) -> None:
        path = self.resolve(key)
        if path.is_file():
            path.unlink()

    def url_for(self, key: str) -> str:
        return f"{settings.UPLOADS_URL_PREFIX.rstrip('/')}/{key}"


storage = LocalStorage()
