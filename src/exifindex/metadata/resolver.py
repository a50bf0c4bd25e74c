# ABOUTME: Field resolution across the EXIF, IPTC, and XMP namespaces of a raw tag mapping.
# ABOUTME: Picks artist, title, and collection using priority-ordered candidate tag names.

import logging
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from exifindex.metadata.types import UNCATEGORIZED, RawMetadata

logger = logging.getLogger(__name__)

# Container names searched after the top-level mapping, in priority order.
# Decoders disagree on casing, so both spellings are accepted.
_CONTAINER_NAMES: tuple[tuple[str, str], ...] = (("IPTC", "iptc"), ("XMP", "xmp"))

ARTIST_KEYS = ("Byline", "Artist", "dc:creator", "Creator", "Author", "Authors", "By-line")
ARTIST_FALLBACK_KEYS = ("Copyright", "CopyrightNotice")
TITLE_KEYS = ("ObjectName", "DocumentName", "ImageDescription", "Title", "XPTitle", "dc:title")
COLLECTION_KEYS = ("Keywords", "keywords", "Subject", "subject", "dc:subject", "Tags", "tags")

# Separators used when several keywords are packed into a single string.
_KEYWORD_SPLIT_RE = re.compile(r"[,;|\n]")


def _is_present(value: Any) -> bool:
    """A tag counts as present unless it is None or an empty string."""
    return value is not None and value != ""


def metadata_sources(bundle: RawMetadata | None) -> list[RawMetadata]:
    """Return the mappings to search: the bundle, then its IPTC and XMP containers.

    Absent or non-mapping containers are skipped.
    """
    if not isinstance(bundle, dict):
        return []

    sources = [bundle]
    for names in _CONTAINER_NAMES:
        for name in names:
            container = bundle.get(name)
            if isinstance(container, dict):
                sources.append(container)
                break
    return sources


def deep_pick(bundle: RawMetadata | None, keys: Sequence[str]) -> Any:
    """Find the first present value for any candidate key.

    Key priority beats source priority: every source is tried for the first
    key before the second key is considered. Within a source an exact key
    match is preferred over a case-insensitive one.

    Returns:
        The matching value, or None if no key matches in any source.
    """
    sources = metadata_sources(bundle)
    if not sources:
        return None

    for key in keys:
        lowered = key.lower()
        for source in sources:
            if key in source and _is_present(source[key]):
                return source[key]
            for name, value in source.items():
                if isinstance(name, str) and name.lower() == lowered and _is_present(value):
                    return value
    return None


def _as_text(value: Any) -> str:
    """Coerce a resolved tag value to display text."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        for item in value:
            text = _as_text(item)
            if text:
                return text
        return ""
    return str(value).strip()


def resolve_artist(bundle: RawMetadata | None) -> str:
    """Resolve the creator, falling back to the copyright notice."""
    value = deep_pick(bundle, ARTIST_KEYS)
    if value is None:
        value = deep_pick(bundle, ARTIST_FALLBACK_KEYS)
        if value is not None:
            logger.debug("Using copyright notice as artist: %r", value)
    return _as_text(value)


def resolve_title(bundle: RawMetadata | None) -> str:
    """Resolve the display title, or an empty string."""
    return _as_text(deep_pick(bundle, TITLE_KEYS))


def _first_keyword(value: Any) -> str | None:
    """Extract the first keyword from a list or a delimited string.

    Only the first list element is considered; a blank one leaves the
    collection unresolved.
    """
    if isinstance(value, (list, tuple)):
        return (_as_text(value[0]) or None) if value else None
    if isinstance(value, str):
        segments = [seg.strip() for seg in _KEYWORD_SPLIT_RE.split(value)]
        segments = [seg for seg in segments if seg]
        return segments[0] if segments else None
    if value is not None:
        return _as_text(value) or None
    return None


def resolve_collection(bundle: RawMetadata | None, file_path: Path, root: Path) -> str:
    """Resolve the grouping label for an image.

    Uses the first keyword/subject/tag when one exists. Otherwise the name of
    the directory holding the file is used, unless that directory is the root
    itself, in which case the image is uncategorized.
    """
    keyword = _first_keyword(deep_pick(bundle, COLLECTION_KEYS))
    if keyword:
        return keyword

    parent = file_path.parent
    if parent.name and parent.resolve() != root.resolve():
        return parent.name
    return UNCATEGORIZED
