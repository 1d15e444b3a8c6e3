"""Tests for working-directory listing, filtering, and change signatures."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from tabpad.listing import collect_files, filter_paths, listing_changed


def _touch(path: Path, text: str = "x") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class CollectFilesTests(unittest.TestCase):
    def test_hidden_files_are_skipped_unless_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("a.txt", ".env", "b.txt"):
                _touch(root / name)

            hidden_off = collect_files(root, show_hidden=False)
            hidden_on = collect_files(root, show_hidden=True)

            self.assertEqual(list(hidden_off.paths), ["a.txt", "b.txt"])
            self.assertEqual(list(hidden_on.paths), [".env", "a.txt", "b.txt"])

    def test_recurses_with_relative_sorted_paths_and_skips_hidden_dirs(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root / "src" / "pkg" / "mod.py")
            _touch(root / "src" / "app.py")
            _touch(root / ".git" / "config")
            _touch(root / "README")
            (root / "empty").mkdir()

            listing = collect_files(root, show_hidden=False)

            self.assertEqual(
                list(listing.paths),
                ["README", os.path.join("src", "app.py"), os.path.join("src", "pkg", "mod.py")],
            )

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks required")
    def test_follows_symlinks_and_skips_broken_ones(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root / "real" / "inner.txt")
            os.symlink(root / "real", root / "linked")
            os.symlink(root / "real" / "inner.txt", root / "alias.txt")
            os.symlink(root / "nowhere", root / "broken.txt")

            listing = collect_files(root, show_hidden=False)

            self.assertEqual(
                list(listing.paths),
                [
                    "alias.txt",
                    os.path.join("linked", "inner.txt"),
                    os.path.join("real", "inner.txt"),
                ],
            )

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks required")
    def test_symlink_cycle_is_visited_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root / "dir" / "file.txt")
            os.symlink(root, root / "dir" / "loop")

            listing = collect_files(root, show_hidden=False)

            self.assertEqual(list(listing.paths), [os.path.join("dir", "file.txt")])


class FilterPathsTests(unittest.TestCase):
    paths = ("Makefile", "src/main.py", "src/make.py", "tests/test_main.py")

    def test_substring_match_is_case_sensitive_and_ordered(self) -> None:
        self.assertEqual(filter_paths(self.paths, "ma"), ["src/main.py", "src/make.py", "tests/test_main.py"])
        self.assertEqual(filter_paths(self.paths, "Ma"), ["Makefile"])

    def test_empty_query_keeps_everything(self) -> None:
        self.assertEqual(filter_paths(self.paths, ""), list(self.paths))

    def test_longer_query_matches_are_subset(self) -> None:
        for query in ("", "s", "sr", "src/m"):
            for extra in ("a", "m", "/", "."):
                narrowed = filter_paths(self.paths, query + extra)
                broad = filter_paths(self.paths, query)
                self.assertTrue(set(narrowed) <= set(broad))


class ListingChangeTests(unittest.TestCase):
    def test_detects_added_file_and_cwd_change(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root / "sub" / "one.txt")
            listing = collect_files(root, show_hidden=False)

            self.assertFalse(listing_changed(listing, root))
            self.assertTrue(listing_changed(listing, root / "sub"))

            _touch(root / "sub" / "two.txt")
            sub = root / "sub"
            st = sub.stat()
            os.utime(sub, ns=(st.st_atime_ns, st.st_mtime_ns + 5_000_000_000))

            self.assertTrue(listing_changed(listing, root))


if __name__ == "__main__":
    unittest.main()
