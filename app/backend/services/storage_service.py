"""
Local disk storage for uploaded PDF files.

Files are written under the configured upload directory with a generated,
collision-free name; the database only records that name.
"""

import logging
import uuid
from pathlib import Path

try:
    from ..config import get_settings
except ImportError:
    from config import get_settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a file cannot be written or removed."""

    pass


class UploadStorage:
    """Reads, writes and deletes uploaded files inside one directory."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def generate_filename(self, original_filename: str) -> str:
        """Opaque name for a new upload, keeping the original extension."""
        return f"{uuid.uuid4()}{Path(original_filename).suffix.lower()}"

    def path_for(self, filename: str) -> Path:
        # Stored names are generated by us; never follow directory parts.
        return self.root / Path(filename).name

    def save(self, original_filename: str, content: bytes) -> str:
        """
        Write ``content`` under a freshly generated name.

        Args:
            original_filename: Client supplied name, used for the extension only.
            content: File bytes.

        Returns:
            The generated filename.

        Raises:
            StorageError: If the directory or file cannot be written.
        """
        filename = self.generate_filename(original_filename)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            self.path_for(filename).write_bytes(content)
        except OSError as e:
            logger.error("Failed to save upload %s: %s", filename, e)
            raise StorageError(f"Failed to save file: {e}") from e

        logger.info("Stored upload %s (%d bytes)", filename, len(content))
        return filename

    def read(self, filename: str) -> bytes:
        """Raises FileNotFoundError when the file is gone."""
        return self.path_for(filename).read_bytes()

    def delete(self, filename: str) -> bool:
        """
        Remove a stored file.

        Returns:
            True if a file was removed, False if it was already absent.

        Raises:
            StorageError: If the file exists but cannot be removed.
        """
        path = self.path_for(filename)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Stored file %s already absent", filename)
            return False
        except OSError as e:
            logger.error("Failed to delete %s: %s", path, e)
            raise StorageError(f"Failed to delete file: {e}") from e
        return True


def get_storage() -> UploadStorage:
    """FastAPI dependency returning storage rooted at the configured directory."""
    return UploadStorage(get_settings().upload_dir)
