"""Tests for the core models module."""

import json

from namecraft.models.core import FileMetadata, MediaCategory, PathFacts


class TestMediaCategory:
    """Tests for the MediaCategory enum."""

    def test_enum_values(self) -> None:
        assert MediaCategory.IMAGE.value == "image"
        assert MediaCategory.VIDEO.value == "video"
        assert MediaCategory.OTHER.value == "other"


class TestPathFacts:
    """Tests for the PathFacts model."""

    def test_record_uses_camel_case(self) -> None:
        facts = PathFacts(
            stem="clip", extension=".mp4", full_name="clip.mp4", is_video=True
        )
        assert facts.to_record() == {
            "stem": "clip",
            "extension": ".mp4",
            "fullName": "clip.mp4",
            "isImage": False,
            "isVideo": True,
        }

    def test_populate_by_alias(self) -> None:
        facts = PathFacts.model_validate(
            {"stem": "a", "extension": ".png", "fullName": "a.png", "isImage": True}
        )
        assert facts.is_image
        assert facts.category is MediaCategory.IMAGE


class TestFileMetadata:
    """Tests for the FileMetadata model."""

    def test_optional_fields_are_omitted(self) -> None:
        meta = FileMetadata(stem="a", extension="", full_name="a", size=0)
        record = meta.to_record()
        assert "timestampMillis" not in record
        assert "timeString" not in record
        assert record["mimeType"] == "application/octet-stream"

    def test_json_round_trip(self) -> None:
        meta = FileMetadata(
            stem="a",
            extension=".jpg",
            full_name="a.jpg",
            is_image=True,
            size=10,
            mime_type="image/jpeg",
            timestamp_millis=1500,
            time_string="1970-01-01 00:00:01",
        )
        parsed = json.loads(json.dumps(meta.to_record()))
        assert parsed["timestampMillis"] == 1500
        assert FileMetadata.model_validate(parsed) == meta
