# ABOUTME: End-to-end tests for the exifindex CLI commands.
# ABOUTME: Runs build and inspect through Click's CliRunner against temp repository trees.

import json
from pathlib import Path

from click.testing import CliRunner

from exifindex.cli import cli


class TestCliGroup:
    def test_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "build" in result.output
        assert "inspect" in result.output


class TestBuildCli:
    def test_writes_default_output(self, gallery_root: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "--root", str(gallery_root)])
        assert result.exit_code == 0, result.output
        assert "Wrote" in result.output
        assert "4 image(s) indexed" in result.output

        out = gallery_root / "data" / "images.json"
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data) == 4
        assert data[0]["filename"] == "sunset.jpg"
        assert data[0]["artist"] == "Jane Doe"

    def test_root_from_environment(self, gallery_root: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["build"], env={"EXIFINDEX_ROOT": str(gallery_root)})
        assert result.exit_code == 0, result.output
        assert (gallery_root / "data" / "images.json").is_file()

    def test_custom_images_and_output(self, gallery_root: Path) -> None:
        (gallery_root / "images").rename(gallery_root / "photos")
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "build",
                "--root",
                str(gallery_root),
                "--images",
                "photos",
                "--output",
                "assets/gallery.json",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads((gallery_root / "assets" / "gallery.json").read_text(encoding="utf-8"))
        assert all(item["path"].startswith("photos/") for item in data)

    def test_missing_images_dir_exits_nonzero(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "--root", str(tmp_path)])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert not (tmp_path / "data" / "images.json").exists()

    def test_unwritable_output_exits_nonzero(self, gallery_root: Path) -> None:
        (gallery_root / "data").write_text("blocking file")
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "--root", str(gallery_root)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_nonexistent_root(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "--root", "/nonexistent/path"])
        assert result.exit_code != 0

    def test_verbose_flag(self, gallery_root: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["-v", "build", "--root", str(gallery_root)])
        assert result.exit_code == 0, result.output


class TestInspectCli:
    def test_table_output(self, gallery_root: Path) -> None:
        runner = CliRunner()
        image = gallery_root / "images" / "sunset.jpg"
        result = runner.invoke(cli, ["inspect", str(image), "--root", str(gallery_root)])
        assert result.exit_code == 0, result.output
        assert "Jane Doe" in result.output
        assert "2023-06-15T14:30:00.000Z" in result.output

    def test_json_output(self, gallery_root: Path) -> None:
        runner = CliRunner()
        image = gallery_root / "images" / "sunset.jpg"
        result = runner.invoke(
            cli, ["inspect", str(image), "--root", str(gallery_root), "--json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data == {
            "filename": "sunset.jpg",
            "path": "images/sunset.jpg",
            "title": "Sunset over the bay",
            "artist": "Jane Doe",
            "collection": "images",
            "creationDate": "2023-06-15T14:30:00.000Z",
        }

    def test_undecodable_image(self, gallery_root: Path) -> None:
        runner = CliRunner()
        image = gallery_root / "images" / "sketch.svg"
        result = runner.invoke(
            cli, ["inspect", str(image), "--root", str(gallery_root), "--json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["title"] == ""
        assert data["creationDate"] == "2020-05-05T00:00:00.000Z"

    def test_nonexistent_path(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "/nonexistent/file.jpg"])
        assert result.exit_code != 0
