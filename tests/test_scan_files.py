from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import _build_gitignore_matcher, find_source_files

if TYPE_CHECKING:
    from pathlib import Path


def _write(root: Path, relative: str, content: str = "") -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _relative_results(root: Path, **kwargs: object) -> list[str]:
    return [
        path.relative_to(root).as_posix()
        for path in find_source_files(root, **kwargs)  # type: ignore[arg-type]
    ]


def test_find_source_files_filters_extensions_and_sorts(tmp_path: Path) -> None:
    for relative in (
        "z.ts",
        "b/index.js",
        "a/view.tsx",
        "a/readme.md",
        "a/data.json",
        "c/worker.mjs",
        "c/legacy.cjs",
        "c/page.jsx",
    ):
        _write(tmp_path, relative)

    assert _relative_results(tmp_path) == [
        "a/view.tsx",
        "b/index.js",
        "c/legacy.cjs",
        "c/page.jsx",
        "c/worker.mjs",
        "z.ts",
    ]


def test_find_source_files_skips_node_modules_and_dot_directories(
    tmp_path: Path,
) -> None:
    _write(tmp_path, "src/app.ts")
    _write(tmp_path, "node_modules/lib/index.js")
    _write(tmp_path, "src/node_modules/inner.ts")
    _write(tmp_path, ".cache/build.ts")
    _write(tmp_path, "src/.hidden/secret.ts")

    assert _relative_results(tmp_path) == ["src/app.ts"]


def test_find_source_files_include_and_exclude_patterns(tmp_path: Path) -> None:
    _write(tmp_path, "src/app.ts")
    _write(tmp_path, "src/app.test.ts")
    _write(tmp_path, "scripts/build.ts")
    _write(tmp_path, "generated/api.ts")

    results = _relative_results(
        tmp_path,
        include_patterns=["src/*", "generated/*"],
        exclude_patterns=["*.test.ts", "generated"],
    )

    assert results == ["src/app.ts"]


def test_globstar_exclude_matches_top_level_directory(tmp_path: Path) -> None:
    _write(tmp_path, "test/a.ts")
    _write(tmp_path, "src/test/b.ts")
    _write(tmp_path, "src/c.ts")

    assert _relative_results(tmp_path, exclude_patterns=["**/test/**"]) == [
        "src/c.ts"
    ]


def test_globstar_include_matches_root_files(tmp_path: Path) -> None:
    _write(tmp_path, "index.ts")
    _write(tmp_path, "core/app.ts")
    _write(tmp_path, "core/app.test.ts")

    results = _relative_results(
        tmp_path,
        include_patterns=["**/*.ts"],
        exclude_patterns=["**/*.test.ts"],
    )

    assert results == ["core/app.ts", "index.ts"]


def test_find_source_files_respects_root_gitignore(tmp_path: Path) -> None:
    _write(tmp_path, ".gitignore", "dist/\n*.gen.ts\n")
    _write(tmp_path, "src/app.ts")
    _write(tmp_path, "src/schema.gen.ts")
    _write(tmp_path, "dist/bundle.js")

    assert _relative_results(tmp_path) == ["src/app.ts"]


def test_find_source_files_custom_skip_dirs(tmp_path: Path) -> None:
    _write(tmp_path, "src/app.ts")
    _write(tmp_path, "vendor/lib.js")
    _write(tmp_path, "node_modules/pkg/index.js")

    assert _relative_results(tmp_path, skip_dirs=("vendor",)) == [
        "node_modules/pkg/index.js",
        "src/app.ts",
    ]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_source_files_skips_symlinked_dirs(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write(repo_root, "pkg/module.ts", "export const ok = 1;\n")

    external_root = tmp_path / "external"
    external_root.mkdir()
    _write(external_root, "leak.ts", "export const leak = 1;\n")

    symlink_dir = repo_root / "linked"
    symlink_dir.symlink_to(external_root, target_is_directory=True)

    results = _relative_results(repo_root)

    assert "pkg/module.ts" in results
    assert "linked/leak.ts" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_source_files_skips_symlinked_files(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write(repo_root, "pkg/module.ts")
    _write(tmp_path, "outside.ts")
    (repo_root / "pkg" / "alias.ts").symlink_to(tmp_path / "outside.ts")

    assert _relative_results(repo_root) == ["pkg/module.ts"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write(repo_root, "pkg/module.ts")
    _write(repo_root, ".gitignore", "*.bin\n")

    external_root = tmp_path / "external"
    external_root.mkdir()
    _write(external_root, "outside.gitignore", "pkg/module.ts\n")

    symlink_gitignore = repo_root / "linked.gitignore"
    symlink_gitignore.symlink_to(external_root / "outside.gitignore")

    matcher = _build_gitignore_matcher(repo_root, nested_gitignore=True)
    assert matcher is not None
    assert matcher(str(repo_root / "pkg" / "module.ts")) is False
