# ABOUTME: Metadata package for resolving gallery fields from raw image tags.
# ABOUTME: Exports the ImageRecord dataclass and the field/date resolution entry points.

from exifindex.metadata.dates import resolve_creation_date, to_canonical
from exifindex.metadata.resolver import (
    deep_pick,
    resolve_artist,
    resolve_collection,
    resolve_title,
)
from exifindex.metadata.types import UNCATEGORIZED, ImageRecord, RawMetadata

__all__ = [
    "UNCATEGORIZED",
    "ImageRecord",
    "RawMetadata",
    "deep_pick",
    "resolve_artist",
    "resolve_collection",
    "resolve_creation_date",
    "resolve_title",
    "to_canonical",
]
