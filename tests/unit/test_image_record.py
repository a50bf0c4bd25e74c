# ABOUTME: Unit tests for the ImageRecord dataclass.
# ABOUTME: Validates serialized field order and the degraded-record shape.

from exifindex.metadata import UNCATEGORIZED, ImageRecord


class TestImageRecord:
    def _record(self, collection: str | None) -> ImageRecord:
        return ImageRecord(
            filename="a.jpg",
            path="images/a.jpg",
            title="Title",
            artist="Artist",
            creation_date="2023-06-15T14:30:00.000Z",
            collection=collection,
        )

    def test_field_order(self) -> None:
        data = self._record("Travel").to_dict()
        assert list(data) == [
            "filename",
            "path",
            "title",
            "artist",
            "collection",
            "creationDate",
        ]
        assert data["creationDate"] == "2023-06-15T14:30:00.000Z"

    def test_degraded_record_omits_collection(self) -> None:
        record = self._record(None)
        assert record.is_degraded is True
        assert "collection" not in record.to_dict()
        assert list(record.to_dict()) == ["filename", "path", "title", "artist", "creationDate"]

    def test_uncategorized_is_not_degraded(self) -> None:
        record = self._record(UNCATEGORIZED)
        assert record.is_degraded is False
        assert record.to_dict()["collection"] == "uncategorized"
