# ABOUTME: Run configuration for building the gallery index.
# ABOUTME: Holds the repository root, image source directory, output path, and decode timeout.

from dataclasses import dataclass
from pathlib import Path

from exifindex.formats.image import DEFAULT_DECODE_TIMEOUT

DEFAULT_IMAGES_DIR = Path("images")
DEFAULT_OUTPUT_PATH = Path("data") / "images.json"


@dataclass(frozen=True)
class IndexConfig:
    """Where to read images from and where to write the index.

    Record paths are written relative to repo_root, so images_dir is expected
    to live somewhere beneath it.
    """

    repo_root: Path
    images_dir: Path
    output_path: Path
    decode_timeout: float | None = DEFAULT_DECODE_TIMEOUT

    @classmethod
    def for_root(
        cls,
        root: Path,
        *,
        images_dir: Path | None = None,
        output_path: Path | None = None,
        decode_timeout: float | None = DEFAULT_DECODE_TIMEOUT,
    ) -> "IndexConfig":
        """Build a config with paths defaulted (and resolved) relative to root."""
        root = root.resolve()
        images = images_dir if images_dir is not None else DEFAULT_IMAGES_DIR
        output = output_path if output_path is not None else DEFAULT_OUTPUT_PATH
        return cls(
            repo_root=root,
            images_dir=(root / images).resolve(),
            output_path=(root / output).resolve(),
            decode_timeout=decode_timeout,
        )
