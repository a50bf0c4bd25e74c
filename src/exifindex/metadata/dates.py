# ABOUTME: Creation-date normalization across IPTC, EXIF, and filesystem sources.
# ABOUTME: Each tier returns an optional datetime; the first present one wins.

import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from exifindex.metadata.resolver import deep_pick
from exifindex.metadata.types import RawMetadata

logger = logging.getLogger(__name__)

IPTC_DATE_KEYS = ("DateCreated", "dateCreated", "Iptc4xmpCore:DateCreated")
IPTC_TIME_KEYS = ("TimeCreated", "timeCreated")
EXIF_DATE_KEYS = ("DateTimeOriginal", "CreateDate", "ModifyDate", "DateTime", "DateAcquired")

# "15/06/2023", "15/06/2023 14:30", "15/06/2023 14:30:05"
_SLASH_DATE_RE = re.compile(
    r"^(?P<day>\d{1,2})/(?P<month>\d{1,2})/(?P<year>\d{4})"
    r"(?:[ T](?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?)?$"
)
_COMPACT_DATE_RE = re.compile(r"^(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})$")
# EXIF-style date prefix, "2023:06:15".
_COLON_DATE_RE = re.compile(r"^(\d{4}):(\d{2}):(\d{2})")
# IPTC TimeCreated is HHMMSS, optionally followed by a UTC offset.
_COMPACT_TIME_RE = re.compile(r"^(\d{2})(\d{2})(\d{2})([+-]\d{2}:?\d{2}|Z)?$")


def _as_datetime(value: date | datetime) -> datetime:
    """Promote a date to midnight; pass datetimes through."""
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _first_scalar(value: Any) -> Any:
    """Lists of dates occur in XMP; only the first entry is meaningful."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _parse_slash_date(text: str) -> datetime | None:
    """Parse D/M/YYYY [H:MM[:SS]] as day/month/year."""
    m = _SLASH_DATE_RE.match(text)
    if not m:
        return None
    try:
        return datetime(
            int(m.group("year")),
            int(m.group("month")),
            int(m.group("day")),
            int(m.group("hour") or 0),
            int(m.group("minute") or 0),
            int(m.group("second") or 0),
        )
    except ValueError:
        return None


def _parse_compact_date(text: str) -> datetime | None:
    """Parse bare YYYYMMDD as midnight of that day."""
    m = _COMPACT_DATE_RE.match(text)
    if not m:
        return None
    try:
        return datetime(int(m.group("year")), int(m.group("month")), int(m.group("day")))
    except ValueError:
        return None


def parse_flexible_date(value: Any) -> datetime | None:
    """Parse a date in any of the supported textual conventions.

    Tries ISO 8601 first, then day-first slash dates, then bare YYYYMMDD.
    Date and datetime objects are accepted as-is.

    Returns:
        The parsed datetime, or None if no rule applies.
    """
    value = _first_scalar(value)
    if isinstance(value, (date, datetime)):
        return _as_datetime(value)
    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    return _parse_slash_date(text) or _parse_compact_date(text)


def parse_iptc_date(date_value: Any, time_value: Any = None) -> datetime | None:
    """Combine IPTC DateCreated and TimeCreated into one datetime.

    DateCreated may use colons ("2023:06:15") or be compact ("20230615");
    TimeCreated may be compact ("143000"). When the structured form does not
    parse, the raw date is retried through parse_flexible_date.
    """
    date_value = _first_scalar(date_value)
    time_value = _first_scalar(time_value)
    if isinstance(date_value, (date, datetime)):
        return _as_datetime(date_value)
    if date_value is None:
        return None

    date_text = _COLON_DATE_RE.sub(r"\1-\2-\3", str(date_value).strip())
    if len(date_text) == 8 and date_text.isdigit():
        date_text = f"{date_text[:4]}-{date_text[4:6]}-{date_text[6:]}"

    candidate = date_text
    if time_value is not None and str(time_value).strip():
        time_text = str(time_value).strip()
        m = _COMPACT_TIME_RE.match(time_text)
        if m:
            offset = m.group(4) or ""
            if len(offset) == 5:
                offset = f"{offset[:3]}:{offset[3:]}"
            time_text = f"{m.group(1)}:{m.group(2)}:{m.group(3)}{offset}"
        candidate = f"{date_text}T{time_text}"

    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return parse_flexible_date(date_value)


def iptc_tier(bundle: RawMetadata | None) -> datetime | None:
    """IPTC DateCreated (+ TimeCreated), if present and parseable."""
    date_value = deep_pick(bundle, IPTC_DATE_KEYS)
    if date_value is None:
        return None
    return parse_iptc_date(date_value, deep_pick(bundle, IPTC_TIME_KEYS))


def exif_tier(bundle: RawMetadata | None) -> datetime | None:
    """First EXIF/generic date-time tag, if present and parseable."""
    return parse_flexible_date(deep_pick(bundle, EXIF_DATE_KEYS))


def filesystem_tier(path: Path) -> datetime:
    """Last-modified time of the file, in UTC."""
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


def resolve_creation_date(bundle: RawMetadata | None, path: Path) -> datetime:
    """Pick the creation date from the first tier that yields one."""
    for tier in (iptc_tier, exif_tier):
        found = tier(bundle)
        if found is not None:
            logger.debug("%s: creation date from %s", path.name, tier.__name__)
            return found
    logger.debug("%s: creation date from filesystem mtime", path.name)
    return filesystem_tier(path)


def to_canonical(value: datetime) -> str:
    """Serialize as a UTC instant: YYYY-MM-DDTHH:MM:SS.mmmZ.

    Naive datetimes carry no offset in the source metadata and are taken
    literally as UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"
