# ABOUTME: Shared pytest fixtures for Exifindex tests.
# ABOUTME: Builds real JPEG/PNG files with Pillow and a small gallery repository tree.

from datetime import datetime
from pathlib import Path

import pytest
from PIL import Image

from tests.fixtures.images import set_mtime, write_jpeg


@pytest.fixture
def sample_jpeg(tmp_path: Path) -> Path:
    """A JPEG with artist, description, and an EXIF date."""
    return write_jpeg(
        tmp_path / "sunset.jpg",
        artist="Jane Doe",
        description="Sunset over the bay",
        date_time="2023:06:15 14:30:00",
    )


@pytest.fixture
def corrupt_image(tmp_path: Path) -> Path:
    """A file with an image extension that is not an image."""
    path = tmp_path / "broken.png"
    path.write_text("this is not a png")
    return path


@pytest.fixture
def gallery_root(tmp_path: Path) -> Path:
    """Create a repository tree with an images/ directory.

    Layout:
        site/
            images/
                sunset.jpg      EXIF artist/description, DateTime 2023-06-15 14:30
                harbor.JPG      no metadata, mtime 2021-01-01
                broken.png      not an image, mtime 2022-03-01
                sketch.svg      SVG (undecodable), mtime 2020-05-05
                notes.txt       ignored
                archive/        ignored subdirectory
                    old.jpg
    """
    root = tmp_path / "site"
    images = root / "images"

    write_jpeg(
        images / "sunset.jpg",
        artist="Jane Doe",
        description="Sunset over the bay",
        date_time="2023:06:15 14:30:00",
    )

    harbor = images / "harbor.JPG"
    Image.new("RGB", (8, 8), "blue").save(harbor, format="JPEG")
    set_mtime(harbor, datetime(2021, 1, 1))

    broken = images / "broken.png"
    broken.write_text("this is not a png")
    set_mtime(broken, datetime(2022, 3, 1))

    sketch = images / "sketch.svg"
    sketch.write_text('<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"/>')
    set_mtime(sketch, datetime(2020, 5, 5))

    (images / "notes.txt").write_text("not an image")
    write_jpeg(images / "archive" / "old.jpg", artist="Nobody")

    return root
