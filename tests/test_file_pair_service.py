from pathlib import Path

import pytest

from imgdiff.errors import DiscoveryError
from imgdiff.models.file_pair import FilePair
from imgdiff.repositories import file_pair_repository
from imgdiff.services.file_pair_service import FilePairService


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


class TestFindPairs:
    """Pair discovery. Order is filesystem order, so results are compared as sets."""

    def test_only_files_present_in_both_trees(self, trees):
        src, dest, _ = trees
        touch(src / "A.png")
        touch(dest / "A.png")
        touch(src / "B.png")

        pairs = FilePairService().find_pairs(src, dest)

        assert pairs == [FilePair(src / "A.png", dest / "A.png")]

    def test_destination_only_files_are_never_visited(self, trees):
        src, dest, _ = trees
        touch(dest / "only_here.png")
        touch(dest / "sub" / "deep.png")

        assert FilePairService().find_pairs(src, dest) == []

    def test_recurses_into_subdirectories(self, trees):
        src, dest, _ = trees
        for rel in ["top.png", "a/one.png", "a/b/two.bmp"]:
            touch(src / rel)
            touch(dest / rel)

        pairs = FilePairService().find_pairs(src, dest)

        assert {p.source_path.relative_to(src) for p in pairs} == {
            Path("top.png"), Path("a/one.png"), Path("a/b/two.bmp"),
        }
        for pair in pairs:
            assert pair.destination_path == dest / pair.source_path.relative_to(src)

    def test_directory_in_destination_is_not_a_counterpart(self, trees):
        src, dest, _ = trees
        touch(src / "clash.png")
        (dest / "clash.png").mkdir()

        assert FilePairService().find_pairs(src, dest) == []

    def test_directories_are_recursed_not_paired(self, trees):
        src, dest, _ = trees
        (src / "empty").mkdir()
        (dest / "empty").mkdir()

        assert FilePairService().find_pairs(src, dest) == []

    def test_root_name_recurring_inside_tree(self, tmp_path):
        src = tmp_path / "shots"
        dest = tmp_path / "expected"
        touch(src / "shots" / "home.png")
        touch(dest / "shots" / "home.png")

        pairs = FilePairService().find_pairs(src, dest)

        assert pairs == [FilePair(src / "shots" / "home.png", dest / "shots" / "home.png")]

    def test_missing_source_dir(self, tmp_path):
        with pytest.raises(DiscoveryError):
            FilePairService().find_pairs(tmp_path / "nope", tmp_path)

    def test_unreadable_directory_aborts_discovery(self, trees, monkeypatch):
        src, dest, _ = trees
        touch(src / "A.png")
        touch(dest / "A.png")
        locked = src / "locked"

        def fake_walk(top, onerror=None):
            yield str(src), ["locked"], ["A.png"]
            onerror(PermissionError(13, "Permission denied", str(locked)))

        monkeypatch.setattr(file_pair_repository.os, "walk", fake_walk)

        with pytest.raises(DiscoveryError) as exc:
            FilePairService().find_pairs(src, dest)
        assert exc.value.path == locked
