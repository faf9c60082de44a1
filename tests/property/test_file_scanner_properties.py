"""
Property-based tests for the FileScanner filter predicate and depth bound.
"""

import os
import tempfile
from pathlib import Path

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from codedigest.core.file_scanner import FileScanner
from codedigest.core.ignore_rules import IgnoreMatchMode, IgnoreRules

# Names come from a small alphabet so ignore tokens collide with them often
name_part = st.sampled_from(["src", "lib", "app", "core", "vendor", "gen", "web"])
extension = st.sampled_from([".js", ".py", ".txt", ".md", ".go", ".json"])
MAPPED = {".js", ".py", ".go"}


@st.composite
def file_tree_strategy(draw):
    """Generate unique relative file paths up to four directories deep."""
    files = set()
    for _ in range(draw(st.integers(min_value=1, max_value=15))):
        dirs = draw(st.lists(name_part, min_size=0, max_size=4))
        stem = draw(name_part) + draw(st.sampled_from(["", "_a", "2"]))
        files.add(os.path.join(*dirs, stem + draw(extension)))
    return sorted(files)


def create_tree(root: Path, files: list[str]) -> None:
    for rel in files:
        path = root / rel
        if path.parent.is_file():
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x = 1\n", encoding="utf-8")


def created_files(root: Path) -> list[str]:
    found = []
    for dirpath, _, filenames in os.walk(root):
        for name in filenames:
            found.append(os.path.relpath(os.path.join(dirpath, name), root))
    return found


@given(
    files=file_tree_strategy(),
    ignored=st.lists(st.sampled_from(["vendor", "gen", "app_a", "lib/", "web"]), max_size=3),
)
@settings(max_examples=60, suppress_health_check=[HealthCheck.too_slow])
def test_substring_inclusion_predicate(files: list[str], ignored: list[str]):
    """A file is scanned iff its extension is mapped and no token is in its path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        create_tree(root, files)
        scanner = FileScanner(ignore_rules=IgnoreRules(tuple(ignored)))

        scanned = [f.relative_path for f in scanner.scan(root)]
        expected = {
            rel
            for rel in created_files(root)
            if Path(rel).suffix in MAPPED and not any(token in rel for token in ignored)
        }

        assert len(scanned) == len(set(scanned))
        assert set(scanned) == expected


@given(files=file_tree_strategy(), ignored=st.lists(name_part, max_size=2))
@settings(max_examples=60, suppress_health_check=[HealthCheck.too_slow])
def test_basename_mode_excludes_exact_segments(files: list[str], ignored: list[str]):
    """In basename mode a file is dropped iff a path segment equals an ignored name."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        create_tree(root, files)
        scanner = FileScanner(ignore_rules=IgnoreRules(tuple(ignored), IgnoreMatchMode.BASENAME))

        scanned = {f.relative_path for f in scanner.scan(root)}
        expected = {
            rel
            for rel in created_files(root)
            if Path(rel).suffix in MAPPED and not set(Path(rel).parts) & set(ignored)
        }

        assert scanned == expected


@given(files=file_tree_strategy(), max_depth=st.integers(min_value=0, max_value=5))
@settings(max_examples=60, suppress_health_check=[HealthCheck.too_slow])
def test_walk_depth_bound(files: list[str], max_depth: int):
    """Bounded walks never go below max_depth; unbounded walks see every entry."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        create_tree(root, files)
        scanner = FileScanner()

        bounded = list(scanner.walk(root, max_depth=max_depth))
        unbounded = list(scanner.walk(root))

        assert all(e.depth < max_depth for e in bounded)
        assert all(len(Path(e.relative_path).parts) == e.depth + 1 for e in unbounded)
        assert [e for e in unbounded if e.depth < max_depth] == bounded
        assert {e.relative_path for e in unbounded if not e.is_dir} == set(created_files(root))
