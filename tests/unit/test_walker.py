"""
Test directory enumeration
"""
import os
import pytest
from string_searcher.core.config import FileMask
from string_searcher.core.models import WarningKind
from string_searcher.storage.walker import DirectoryWalker
from string_searcher.utils.helpers import list_directory_entries


def make_tree(root, paths):
    for relative in paths:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("content\n")


def relative(root, files):
    return sorted(os.path.relpath(f, root).replace(os.sep, "/") for f in files)


class TestDirectoryWalker:
    """Test walking, masking and depth limits"""

    def setup_method(self):
        self.warnings = []
        self.walker = DirectoryWalker(warning_sink=self.warnings.append)

    def test_walks_whole_tree(self, tmp_path):
        make_tree(tmp_path, ["a.txt", "b/c.txt", "b/d/e.md", "f/g/h/i.txt"])

        files = self.walker.walk(str(tmp_path))

        assert relative(tmp_path, files) == ["a.txt", "b/c.txt", "b/d/e.md", "f/g/h/i.txt"]
        assert all(os.path.isabs(f) for f in files)

    def test_applies_mask(self, tmp_path):
        make_tree(tmp_path, ["a.txt", "b/c.txt", "b/d/e.md", "README"])

        files = self.walker.walk(str(tmp_path), FileMask.parse("*.txt"))

        assert relative(tmp_path, files) == ["a.txt", "b/c.txt"]

    def test_depth_limit_includes_files_at_limit(self, tmp_path):
        make_tree(tmp_path, ["root.txt", "l1/one.txt", "l1/l2/two.txt", "l1/l2/l3/three.txt"])

        assert relative(tmp_path, self.walker.walk(str(tmp_path), max_depth=1)) == [
            "l1/one.txt", "root.txt",
        ]
        assert relative(tmp_path, self.walker.walk(str(tmp_path), max_depth=2)) == [
            "l1/l2/two.txt", "l1/one.txt", "root.txt",
        ]

    def test_depth_limit_never_lists_deeper_directories(self, tmp_path):
        make_tree(tmp_path, ["l1/l2/l3/deep.txt"])
        listed = []

        def spy(directory):
            listed.append(os.path.relpath(directory, tmp_path))
            return list_directory_entries(directory)

        DirectoryWalker(list_entries=spy).walk(str(tmp_path), max_depth=1)

        assert sorted(listed) == [".", "l1"]

    def test_zero_depth_is_unlimited(self, tmp_path):
        make_tree(tmp_path, ["a/b/c/d/e/f/g.txt"])

        assert relative(tmp_path, self.walker.walk(str(tmp_path), max_depth=0)) == ["a/b/c/d/e/f/g.txt"]

    def test_deep_tree_does_not_recurse(self, tmp_path):
        deep = "/".join(["d"] * 60) + "/leaf.txt"
        make_tree(tmp_path, [deep])

        assert relative(tmp_path, self.walker.walk(str(tmp_path))) == [deep]

    def test_unlistable_directory_is_skipped(self, tmp_path):
        make_tree(tmp_path, ["ok/a.txt", "locked/b.txt", "c.txt"])
        locked = str(tmp_path / "locked")

        def flaky(directory):
            if directory == locked:
                raise PermissionError(13, "Permission denied", directory)
            return list_directory_entries(directory)

        walker = DirectoryWalker(list_entries=flaky, warning_sink=self.warnings.append)
        files = walker.walk(str(tmp_path))

        assert relative(tmp_path, files) == ["c.txt", "ok/a.txt"]
        assert len(self.warnings) == 1
        assert self.warnings[0].kind == WarningKind.UNREADABLE_DIRECTORY
        assert self.warnings[0].path == locked

    def test_missing_root_is_reported(self, tmp_path):
        files = self.walker.walk(str(tmp_path / "nope"))

        assert files == []
        assert self.warnings[0].kind == WarningKind.UNREADABLE_DIRECTORY

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_does_not_follow_directory_symlinks(self, tmp_path):
        make_tree(tmp_path, ["sub/a.txt"])
        os.symlink(str(tmp_path), str(tmp_path / "sub" / "loop"))

        assert relative(tmp_path, self.walker.walk(str(tmp_path))) == ["sub/a.txt"]


if __name__ == '__main__':
    pytest.main([__file__])
