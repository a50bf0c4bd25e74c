# ABOUTME: Core data structures for the gallery image index.
# ABOUTME: ImageRecord is the canonical per-file entry serialized into images.json.

from dataclasses import dataclass
from typing import Any

# Raw tag mapping as returned by the decoder. Values are strings, lists of
# strings, typed dates, or nested containers ("IPTC", "XMP").
RawMetadata = dict[str, Any]

UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class ImageRecord:
    """Canonical description of one gallery image.

    Every scanned file produces exactly one record. ``collection`` is None only
    for degraded records, built when resolution failed outright; such records
    leave the field out of the serialized form entirely.
    """

    filename: str
    path: str
    title: str
    artist: str
    creation_date: str
    collection: str | None = None

    @property
    def is_degraded(self) -> bool:
        """Whether this record came from the coarse fallback path."""
        return self.collection is None

    def to_dict(self) -> dict[str, str]:
        """Serialize with the stable JSON field order used by the site."""
        data = {
            "filename": self.filename,
            "path": self.path,
            "title": self.title,
            "artist": self.artist,
        }
        if self.collection is not None:
            data["collection"] = self.collection
        data["creationDate"] = self.creation_date
        return data
