# ABOUTME: Index pipeline: scan images, resolve one record per file, sort, and write JSON.
# ABOUTME: Per-file failures degrade to minimal records; only scan/write failures abort the run.

import json
import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from exifindex.core.config import IndexConfig
from exifindex.core.scanner import scan_images
from exifindex.errors import ExifIndexError
from exifindex.formats.image import MetadataReader
from exifindex.metadata.dates import filesystem_tier, resolve_creation_date, to_canonical
from exifindex.metadata.resolver import resolve_artist, resolve_collection, resolve_title
from exifindex.metadata.types import ImageRecord

logger = logging.getLogger(__name__)


class IndexWriteError(ExifIndexError):
    """Raised when the index file cannot be written."""


@dataclass
class IndexResult:
    """Outcome of a completed index run."""

    output_path: Path
    records: list[ImageRecord]

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def degraded(self) -> int:
        """Number of records built through the coarse fallback path."""
        return sum(1 for record in self.records if record.is_degraded)


def relative_posix(path: Path, root: Path) -> str:
    """Path relative to root with forward slashes, whatever the host OS."""
    return Path(os.path.relpath(path, root)).as_posix()


def degraded_record(path: Path, root: Path) -> ImageRecord:
    """Minimal record: no title, artist, or collection; date from mtime."""
    return ImageRecord(
        filename=path.name,
        path=relative_posix(path, root),
        title="",
        artist="",
        creation_date=to_canonical(filesystem_tier(path)),
    )


def build_record(path: Path, reader: MetadataReader, root: Path) -> ImageRecord:
    """Resolve the full record for one image file.

    Falls back to degraded_record if anything in decoding or resolution
    raises past the reader's own error handling.
    """
    try:
        bundle = reader.read(path)
        return ImageRecord(
            filename=path.name,
            path=relative_posix(path, root),
            title=resolve_title(bundle),
            artist=resolve_artist(bundle),
            collection=resolve_collection(bundle, path, root),
            creation_date=to_canonical(resolve_creation_date(bundle, path)),
        )
    except Exception as exc:
        logger.warning("Falling back to minimal record for %s: %s", path.name, exc)
        return degraded_record(path, root)


def sort_records(records: Iterable[ImageRecord]) -> list[ImageRecord]:
    """Most recent first. Canonical dates sort correctly as strings."""
    return sorted(records, key=lambda record: record.creation_date, reverse=True)


def render_index(records: Iterable[ImageRecord]) -> str:
    """Serialize records as a pretty-printed JSON array."""
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def write_index(records: Iterable[ImageRecord], output_path: Path) -> Path:
    """Write the index in one step, replacing any previous file.

    Content goes to a temporary sibling first and is then moved into place,
    so readers never observe a partially written index.

    Raises:
        IndexWriteError: If the directory or file cannot be written.
    """
    content = render_index(records)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise IndexWriteError(f"Cannot write index: {output_path}: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        # mkstemp creates owner-only files; the site server needs to read it.
        tmp_path.chmod(0o644)
        os.replace(tmp_path, output_path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise IndexWriteError(f"Cannot write index: {output_path}: {exc}") from exc

    return output_path


def build_index(config: IndexConfig, reader: MetadataReader | None = None) -> list[ImageRecord]:
    """Scan config.images_dir and build one record per image, sorted by date.

    Raises:
        ScanError: If the image directory cannot be listed.
    """
    paths = scan_images(config.images_dir)
    logger.info("Found %d image(s) in %s", len(paths), config.images_dir)

    if reader is None:
        reader = MetadataReader(timeout=config.decode_timeout)
    records = [build_record(path, reader, config.repo_root) for path in paths]

    return sort_records(records)


def run(config: IndexConfig, reader: MetadataReader | None = None) -> IndexResult:
    """Build the index and write it to config.output_path."""
    records = build_index(config, reader)
    output_path = write_index(records, config.output_path)
    return IndexResult(output_path=output_path, records=records)
