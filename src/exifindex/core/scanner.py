# ABOUTME: Directory scanner for gallery source images.
# ABOUTME: Lists a single directory and keeps regular files with a recognized image extension.

from pathlib import Path

from exifindex.errors import ExifIndexError

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".tif", ".tiff", ".png", ".webp", ".gif", ".svg"}
)


class ScanError(ExifIndexError):
    """Raised when the image directory cannot be listed."""


def is_image_file(path: Path) -> bool:
    """Check the extension against IMAGE_EXTENSIONS, ignoring case."""
    return path.suffix.lower() in IMAGE_EXTENSIONS


def scan_images(directory: Path) -> list[Path]:
    """List the image files directly inside a directory.

    Subdirectories and files with other extensions are skipped. Results are
    sorted by name so repeated runs see files in the same order.

    Args:
        directory: The image source directory.

    Returns:
        Paths of matching regular files.

    Raises:
        ScanError: If the directory does not exist or cannot be read.
    """
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise ScanError(f"Cannot list image directory: {directory}: {exc}") from exc

    return sorted(
        (entry for entry in entries if entry.is_file() and is_image_file(entry)),
        key=lambda p: p.name,
    )
