"""Tests for media discovery and extension counting."""

import pytest

from conftest import write_file
from media_scanner import MediaCategory, MediaScanner, count_extensions
from taxis_errors import ConfigurationError


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "inbox"
    for name in [
        "b/IMG_2.JPG",
        "a/IMG_1.jpeg",
        "a/clip.MOV",
        "song.mp3",
        "lossless.flac",
        "memo.wav",
        "notes.txt",
        "Makefile",
        "z.png",
    ]:
        write_file(root / name)
    return root


class TestMediaScanner:
    def test_classifies_by_lowercase_extension(self, tree):
        result = MediaScanner().scan(tree)

        assert [p.relative_to(tree).as_posix() for p in result.images] == ["z.png", "a/IMG_1.jpeg", "b/IMG_2.JPG"]
        assert [p.name for p in result.videos] == ["clip.MOV"]
        assert [p.name for p in result.audio] == ["song.mp3"]

    def test_disabled_extensions_are_ignored(self, tree):
        scanner = MediaScanner()

        assert scanner.classify(tree / "lossless.flac") is None
        assert scanner.classify(tree / "memo.wav") is None

    def test_injected_table(self, tree):
        scanner = MediaScanner(categories={"txt": MediaCategory.IMAGE}, disabled=())

        assert [p.name for p in scanner.scan(tree).images] == ["notes.txt"]

    def test_enabling_flac(self, tree):
        scanner = MediaScanner(disabled=())

        assert sorted(p.name for p in scanner.scan(tree).audio) == ["lossless.flac", "memo.wav", "song.mp3"]

    def test_scan_order_is_stable(self, tree):
        assert MediaScanner().scan(tree) == MediaScanner().scan(tree)

    def test_missing_root(self, tmp_path):
        with pytest.raises(ConfigurationError):
            MediaScanner().scan(tmp_path / "nope")


class TestCountExtensions:
    def test_counts_lowercased(self, tree):
        write_file(tree / "c" / "IMG_3.jpg")

        counts = count_extensions(tree)

        assert counts["jpg"] == 2
        assert counts["mov"] == 1
        assert counts[""] == 1
        assert "JPG" not in counts

    def test_missing_root(self, tmp_path):
        with pytest.raises(ConfigurationError):
            count_extensions(tmp_path / "nope")
