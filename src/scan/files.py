"""Source file discovery for dircycle."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from config.loader import DEFAULT_EXTENSIONS, DEFAULT_SKIP_DIRS

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from pathlib import Path


def _glob_variants(pattern: str) -> Iterator[str]:
    """Yield fnmatch forms of ``pattern`` letting ``**/`` and ``/**`` match nothing.

    ``**/test/**`` therefore also matches ``test/a.ts`` and the ``test``
    directory itself, not only ``src/test/b.ts``.
    """
    current = pattern
    while True:
        yield current
        if current.endswith("/**"):
            yield current[:-3]
        if not current.startswith("**/"):
            return
        current = current[3:]


def _matches_any(rel_path_str: str, patterns: Sequence[str] | None) -> bool:
    return bool(patterns) and any(
        fnmatch(rel_path_str, variant)
        for pat in patterns
        for variant in _glob_variants(pat)
    )


def _should_descend(
    path: Path,
    directory: Path,
    skip_dirs: Sequence[str],
    gitignore_matches: Callable[[str], bool] | None,
    exclude_patterns: Sequence[str] | None,
) -> bool:
    """Check if a subdirectory should be walked."""
    if path.is_symlink() or path.name.startswith("."):
        return False

    if path.name in skip_dirs:
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    rel_path_str = path.relative_to(directory).as_posix()
    return not _matches_any(rel_path_str, exclude_patterns)


def _should_include_file(
    path: Path,
    directory: Path,
    extensions: Sequence[str],
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: Sequence[str] | None,
    exclude_patterns: Sequence[str] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if path.suffix not in extensions:
        return False

    if not _is_within_root(path, directory):
        return False

    try:
        rel_path = path.relative_to(directory)
    except ValueError:
        return False

    rel_path_str = rel_path.as_posix()

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    if include_patterns and not _matches_any(rel_path_str, include_patterns):
        return False

    return not _matches_any(rel_path_str, exclude_patterns)


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {path for path in gitignore_paths if path.is_file()}
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    skip_dirs: Sequence[str] = DEFAULT_SKIP_DIRS,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all source files in a directory, respecting .gitignore.

    Args:
        directory: Directory to search for source files
        extensions: File suffixes to collect (e.g. ".ts")
        include_patterns: Optional list of fnmatch patterns; if provided,
            files must match at least one pattern to be included
        exclude_patterns: Optional list of fnmatch patterns; files and
            directories matching any pattern are skipped
        skip_dirs: Directory names that are never descended into
        nested_gitignore: Compose every .gitignore below the directory

    Yields:
        Path objects for each source file found, sorted lexicographically
        by relative path for deterministic ordering.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files: list[Path] = []
    pending = [directory]
    while pending:
        current = pending.pop()
        for path in current.iterdir():
            if path.is_dir():
                if _should_descend(
                    path, directory, skip_dirs, gitignore_matches, exclude_patterns
                ):
                    pending.append(path)
            elif _should_include_file(
                path,
                directory,
                extensions,
                gitignore_matches,
                include_patterns,
                exclude_patterns,
            ):
                matched_files.append(path)

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["_should_include_file", "find_source_files"]
