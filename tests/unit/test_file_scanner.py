"""
Unit tests for the FileScanner walker and filter predicate.
"""

import os
from pathlib import Path
from unittest.mock import patch

from codedigest.core.file_scanner import FileScanner, LanguageRegistry
from codedigest.core.ignore_rules import IgnoreMatchMode, IgnoreRules


def make_tree(root: Path, files: list[str]) -> None:
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {rel}\n", encoding="utf-8")


def rel(*parts: str) -> str:
    return os.path.join(*parts)


class TestWalk:
    def test_pre_order_with_lexical_names(self, tmp_path):
        make_tree(tmp_path, ["b.js", "a/z.js", "a/c/d.js"])

        entries = list(FileScanner().walk(tmp_path))

        assert [(e.relative_path, e.depth, e.is_dir) for e in entries] == [
            ("a", 0, True),
            (rel("a", "c"), 1, True),
            (rel("a", "c", "d.js"), 2, False),
            (rel("a", "z.js"), 1, False),
            ("b.js", 0, False),
        ]

    def test_max_depth_bounds_entries(self, tmp_path):
        make_tree(tmp_path, ["a/b/c/d.js", "top.js"])

        names = [e.relative_path for e in FileScanner().walk(tmp_path, max_depth=2)]

        assert names == ["a", rel("a", "b"), "top.js"]

    def test_zero_depth_yields_nothing(self, tmp_path):
        make_tree(tmp_path, ["a.js"])

        assert list(FileScanner().walk(tmp_path, max_depth=0)) == []

    def test_missing_root_yields_nothing(self, tmp_path):
        assert list(FileScanner().walk(tmp_path / "missing")) == []
        assert list(FileScanner().scan(tmp_path / "missing")) == []

    def test_relative_paths_use_scan_root(self, tmp_path):
        make_tree(tmp_path, ["src/app.js"])

        entries = list(FileScanner().walk(tmp_path / "src", scan_root=tmp_path))

        assert entries[0].relative_path == rel("src", "app.js")
        assert entries[0].depth == 0

    def test_basename_rules_prune_directories(self, tmp_path):
        make_tree(tmp_path, [".git/config.js", "node_modules/x.js", "src/x.js"])
        rules = IgnoreRules((".git", "node_modules"), IgnoreMatchMode.BASENAME)

        names = [e.relative_path for e in FileScanner(ignore_rules=rules).walk(tmp_path)]

        assert names == ["src", rel("src", "x.js")]

    def test_substring_rules_prune_directories(self, tmp_path):
        make_tree(tmp_path, ["node_modules/x.js", "web/node_modules_old/y.js", "src/x.js"])
        rules = IgnoreRules(("node_modules",))

        names = [e.relative_path for e in FileScanner(ignore_rules=rules).walk(tmp_path)]

        assert names == ["src", rel("src", "x.js"), "web"]

    def test_vanished_entry_is_skipped(self, tmp_path, caplog):
        make_tree(tmp_path, ["a.js", "b.js"])
        original_stat = Path.stat

        def flaky_stat(self, *args, **kwargs):
            if self.name == "a.js":
                raise FileNotFoundError(str(self))
            return original_stat(self, *args, **kwargs)

        with patch.object(Path, "stat", flaky_stat):
            names = [e.name for e in FileScanner().walk(tmp_path)]

        assert names == ["b.js"]
        assert "disappeared" in caplog.text

    def test_unlistable_directory_is_skipped(self, tmp_path, caplog):
        make_tree(tmp_path, ["a/x.js", "b.js"])
        original_listdir = os.listdir

        def flaky_listdir(path):
            if Path(path).name == "a":
                raise PermissionError("denied")
            return original_listdir(path)

        with patch("codedigest.core.file_scanner.scanner.os.listdir", flaky_listdir):
            names = [e.relative_path for e in FileScanner().walk(tmp_path)]

        assert names == ["a", "b.js"]
        assert "Permission denied" in caplog.text


class TestScan:
    def test_filters_by_extension_and_substring_rules(self, tmp_path):
        make_tree(
            tmp_path,
            ["src/app.ts", "src/notes.txt", "node_modules/lib.js", "Migrations2/init.cs"],
        )
        scanner = FileScanner(ignore_rules=IgnoreRules(("node_modules", "Migrations")))

        scanned = list(scanner.scan(tmp_path))

        assert [(f.relative_path, f.language) for f in scanned] == [(rel("src", "app.ts"), "typescript")]

    def test_custom_registry(self, tmp_path):
        make_tree(tmp_path, ["q.sql", "a.py"])
        registry = LanguageRegistry(load_defaults=False).register("sql", [".sql"])

        scanned = list(FileScanner(language_registry=registry).scan(tmp_path))

        assert [f.language for f in scanned] == ["sql"]

    def test_top_level_folder(self, tmp_path):
        make_tree(tmp_path, ["root.js", "src/deep/x.js"])

        folders = {f.relative_path: f.top_level_folder for f in FileScanner().scan(tmp_path)}

        assert folders == {"root.js": ".", rel("src", "deep", "x.js"): "src"}
