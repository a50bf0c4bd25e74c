# ABOUTME: Base exception for failures that abort an index run.
# ABOUTME: Per-file problems never surface as these; they are absorbed by fallbacks.


class ExifIndexError(Exception):
    """Base class for fatal index-build errors (unreadable source, unwritable output)."""
