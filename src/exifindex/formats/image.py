# ABOUTME: Raw EXIF/IPTC/XMP extraction from image files using Pillow.
# ABOUTME: Defensive wrapper with a per-file timeout that turns decode failures into no metadata.

import logging
import re
import threading
from collections.abc import Callable
from concurrent.futures import Future
from datetime import datetime
from pathlib import Path
from typing import Any

from PIL import ExifTags, Image, IptcImagePlugin

from exifindex.metadata.types import RawMetadata

logger = logging.getLogger(__name__)

DEFAULT_DECODE_TIMEOUT = 30.0

# IIM record 2 datasets, named the way common JavaScript/ExifTool decoders name them.
IPTC_DATASETS: dict[tuple[int, int], str] = {
    (2, 5): "ObjectName",
    (2, 15): "Category",
    (2, 20): "SupplementalCategories",
    (2, 25): "Keywords",
    (2, 55): "DateCreated",
    (2, 60): "TimeCreated",
    (2, 80): "Byline",
    (2, 85): "BylineTitle",
    (2, 90): "City",
    (2, 101): "Country",
    (2, 105): "Headline",
    (2, 110): "Credit",
    (2, 115): "Source",
    (2, 116): "CopyrightNotice",
    (2, 120): "Caption",
}

# Datasets that may legitimately repeat; always exposed as lists.
_IPTC_REPEATABLE = frozenset({"Keywords", "SupplementalCategories", "Byline"})

_EXIF_DATE_TAGS = frozenset({"DateTime", "DateTimeOriginal", "DateTimeDigitized"})
_EXIF_DATE_RE = re.compile(r"^(\d{4}):(\d{2}):(\d{2})[ T](\d{2}):(\d{2}):(\d{2})")

# Pillow tag names also exposed under the names ExifTool and exifr use.
_EXIF_ALIASES: dict[str, str] = {
    "DateTimeDigitized": "CreateDate",
    "DateTime": "ModifyDate",
}

# Windows Explorer tags are stored as UTF-16LE byte arrays.
_XP_TAGS = frozenset({"XPTitle", "XPComment", "XPAuthor", "XPKeywords", "XPSubject"})

_XMP_CONTAINERS = ("Seq", "Bag", "Alt")
_XMP_SKIP_KEYS = frozenset({"about"})


class ImageReadError(Exception):
    """Raised when an image file's metadata cannot be decoded."""


def _revive_exif_date(text: str) -> datetime | None:
    """Turn 'YYYY:MM:DD HH:MM:SS' into a datetime; zeroed dates become None."""
    m = _EXIF_DATE_RE.match(text)
    if not m:
        return None
    try:
        return datetime(*(int(part) for part in m.groups()))
    except ValueError:
        return None


def _clean_exif_value(name: str, value: Any) -> Any:
    """Decode bytes, strip NUL padding, and revive date strings."""
    if name in _XP_TAGS and isinstance(value, tuple):
        value = bytes(value)
    if isinstance(value, bytes):
        encoding = "utf-16-le" if name in _XP_TAGS else "utf-8"
        value = value.decode(encoding, errors="replace")
    if isinstance(value, str):
        value = value.replace("\x00", "").strip()
        if name in _EXIF_DATE_TAGS:
            return _revive_exif_date(value)
    return value


def _read_exif(img: Image.Image) -> RawMetadata:
    """Collect IFD0 and Exif sub-IFD tags by their standard names."""
    exif = img.getexif()
    tags: RawMetadata = {}
    ifds = [exif, exif.get_ifd(ExifTags.IFD.Exif)]
    for ifd in ifds:
        for tag_id, value in ifd.items():
            name = ExifTags.TAGS.get(tag_id)
            if name is None or name in tags:
                continue
            tags[name] = _clean_exif_value(name, value)
    for name, alias in _EXIF_ALIASES.items():
        if name in tags:
            tags.setdefault(alias, tags[name])
    return tags


def _decode_iptc(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").replace("\x00", "").strip()


def _read_iptc(img: Image.Image) -> RawMetadata:
    """Collect IIM record 2 datasets that have a known name."""
    info = IptcImagePlugin.getiptcinfo(img)
    if not info:
        return {}

    tags: RawMetadata = {}
    for key, raw in info.items():
        name = IPTC_DATASETS.get(key)
        if name is None:
            continue
        values = [_decode_iptc(item) for item in (raw if isinstance(raw, list) else [raw])]
        if name in _IPTC_REPEATABLE:
            tags[name] = values
        else:
            tags[name] = values[0] if values else None
    return tags


def _unwrap_xmp(value: Any) -> Any:
    """Reduce rdf:Seq/Bag/Alt structures to plain values or lists."""
    if isinstance(value, list):
        return [_unwrap_xmp(item) for item in value]
    if not isinstance(value, dict):
        return value

    for container in _XMP_CONTAINERS:
        if container in value:
            inner = value[container]
            items = inner.get("li") if isinstance(inner, dict) else None
            if items is None:
                return None
            items = _unwrap_xmp(items)
            if container == "Alt":
                return items[0] if isinstance(items, list) and items else items
            return items if isinstance(items, list) else [items]

    if "text" in value:
        return value["text"]
    return value


def _read_xmp(img: Image.Image) -> RawMetadata:
    """Flatten every rdf:Description in the XMP packet into one mapping."""
    # Only some format plugins expose XMP.
    getxmp = getattr(img, "getxmp", None)
    xmp = getxmp() if getxmp is not None else {}
    root = xmp.get("xmpmeta", xmp)
    rdf = root.get("RDF") if isinstance(root, dict) else None
    descriptions = rdf.get("Description", []) if isinstance(rdf, dict) else []
    if isinstance(descriptions, dict):
        descriptions = [descriptions]

    tags: RawMetadata = {}
    for description in descriptions:
        if not isinstance(description, dict):
            continue
        for name, value in description.items():
            if name in _XMP_SKIP_KEYS or name in tags:
                continue
            tags[name] = _unwrap_xmp(value)
    return tags


def read_image_metadata(path: Path) -> RawMetadata:
    """Extract raw metadata tags from an image file.

    EXIF tags land at the top level; IPTC and XMP tags are nested under
    "IPTC" and "XMP" when the file carries them.

    Args:
        path: Path to the image file.

    Returns:
        A mapping of tag name to value.

    Raises:
        ImageReadError: If the file cannot be opened or decoded.
    """
    if not path.exists():
        raise ImageReadError(f"File not found: {path}")

    try:
        with Image.open(path) as img:
            bundle = _read_exif(img)
            iptc = _read_iptc(img)
            xmp = _read_xmp(img)
    except Exception as exc:
        raise ImageReadError(f"Failed to read image metadata: {path}: {exc}") from exc

    if iptc:
        bundle["IPTC"] = iptc
    if xmp:
        bundle["XMP"] = xmp
    return bundle


class MetadataReader:
    """Runs the decoder for one file at a time, absorbing failures.

    A decode that raises ImageReadError or exceeds the timeout yields None.
    Each timed decode runs on its own daemon thread, so a hung file neither
    stalls the files behind it nor keeps the process alive at exit.
    """

    def __init__(
        self,
        *,
        timeout: float | None = DEFAULT_DECODE_TIMEOUT,
        decoder: Callable[[Path], RawMetadata] = read_image_metadata,
    ) -> None:
        self._timeout = timeout
        self._decoder = decoder

    def _decode_into(self, path: Path, future: Future) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(self._decoder(path))
        except BaseException as exc:
            future.set_exception(exc)

    def _submit(self, path: Path) -> Future:
        future: Future = Future()
        worker = threading.Thread(
            target=self._decode_into,
            args=(path, future),
            name=f"exifindex-decode-{path.name}",
            daemon=True,
        )
        worker.start()
        return future

    def read(self, path: Path) -> RawMetadata | None:
        """Decode one file, returning None when its metadata is unavailable."""
        try:
            if self._timeout is None:
                return self._decoder(path)
            return self._submit(path).result(timeout=self._timeout)
        except ImageReadError as exc:
            logger.warning("No metadata for %s: %s", path.name, exc)
            return None
        except TimeoutError:
            logger.warning(
                "Metadata decode for %s timed out after %.1fs", path.name, self._timeout
            )
            return None
