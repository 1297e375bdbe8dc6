"""
Tests for the command-line entry point.
"""

from PIL import Image

from main import main, parse_arguments


class TestParseArguments:

    def test_defaults(self):
        args = parse_arguments(["--input", "scans"])

        assert args.input == "scans"
        assert args.mode is None
        assert args.engine is None

    def test_ranked_engines(self):
        args = parse_arguments(["-i", "scans", "-e", "easyocr", "-e", "tesseract", "-m", "table"])

        assert args.engine == ["easyocr", "tesseract"]
        assert args.mode == "table"


class TestMain:
    """Test end-to-end runs of the CLI."""

    def test_unavailable_engine_writes_markers(self, tmp_path):
        scans = tmp_path / "scans"
        scans.mkdir()
        for name in ["b.png", "a.png"]:
            Image.new("RGB", (8, 8), "white").save(scans / name)
        output = tmp_path / "out" / "result.txt"

        code = main(["--input", str(scans), "--engine", "no-such-engine",
                     "--output", str(output), "--quiet"])

        assert code == 0
        assert output.read_text(encoding="utf-8") == (
            "Recognition failed: a.png\n\nRecognition failed: b.png\n"
        )

    def test_missing_input(self, tmp_path):
        assert main(["--input", str(tmp_path / "nowhere"), "--quiet"]) == 1

    def test_unsupported_file(self, tmp_path):
        path = tmp_path / "scan.gif"
        path.write_bytes(b"")

        assert main(["--input", str(path), "--quiet"]) == 1
