import hashlib
import json
import logging
import tempfile
from pathlib import Path

from midivault.domain.catalog.model.value import Blob
from midivault.domain.catalog.port.blob_store import BlobStore
from midivault.domain.shared.error import StorageError, ValidationError

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".json"


class LocalFileBlobStore(BlobStore):
    """Local filesystem implementation of BlobStore.

    Each blob is two files in ``base_path``: the payload named by its key, and a
    ``<key>.json`` sidecar with the original filename, content type, size and checksum.
    """

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path).expanduser()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _safe_path(self, key: str) -> Path:
        """Resolve key within base_path, rejecting anything that is not a plain file name."""
        safe_name = Path(key).name
        if (
            not safe_name
            or safe_name != key
            or safe_name.startswith(".")
            or safe_name.endswith(SIDECAR_SUFFIX)
        ):
            raise ValidationError(f"Invalid blob key: {key!r}", field="key")
        target = self.base_path / safe_name
        if not target.resolve().is_relative_to(self.base_path.resolve()):
            raise ValidationError(f"Invalid blob key: {key!r}", field="key")
        return target

    def _sidecar(self, target: Path) -> Path:
        return target.with_name(target.name + SIDECAR_SUFFIX)

    def _write_atomic(self, target: Path, content: bytes) -> None:
        # Atomic write: write to temp file then rename
        fd, tmp_path = tempfile.mkstemp(dir=self.base_path, prefix=".tmp-")
        try:
            with open(fd, "wb") as f:
                f.write(content)
            Path(tmp_path).replace(target)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    async def put(self, blob: Blob) -> None:
        target = self._safe_path(blob.key)
        meta = {
            "filename": blob.filename,
            "contentType": blob.content_type,
            "size": blob.size,
            "checksum": blob.checksum,
        }
        try:
            self._write_atomic(target, blob.content)
            self._write_atomic(self._sidecar(target), json.dumps(meta).encode())
        except OSError as e:
            logger.error("Writing blob %s failed: %s", blob.key, e)
            raise StorageError(f"Failed to store blob '{blob.key}'") from e

    async def get(self, key: str) -> Blob | None:
        target = self._safe_path(key)
        try:
            if not target.exists():
                return None
            content = target.read_bytes()
            sidecar = self._sidecar(target)
            meta = json.loads(sidecar.read_text()) if sidecar.exists() else {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Reading blob %s failed: %s", key, e)
            raise StorageError(f"Failed to read blob '{key}'") from e

        return Blob(
            key=key,
            filename=meta.get("filename", key),
            content_type=meta.get("contentType"),
            size=len(content),
            checksum=meta.get("checksum") or f"sha256:{hashlib.sha256(content).hexdigest()}",
            content=content,
        )

    async def delete(self, key: str) -> None:
        target = self._safe_path(key)
        try:
            target.unlink(missing_ok=True)
            self._sidecar(target).unlink(missing_ok=True)
        except OSError as e:
            logger.error("Deleting blob %s failed: %s", key, e)
            raise StorageError(f"Failed to delete blob '{key}'") from e

    async def exists(self, key: str) -> bool:
        return self._safe_path(key).exists()
