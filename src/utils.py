"""Shared path utilities for dircycle."""

from __future__ import annotations

from pathlib import Path, PurePosixPath


def _normalize_separators(path_str: str) -> str:
    return path_str.replace("\\", "/")


def path_to_module_name(file_path: str | Path) -> str:
    """Convert a relative file path to a logical module name.

    The final extension is stripped and separators are normalized to ``/``.

    Examples:
        >>> path_to_module_name("src/ui/view.tsx")
        'src/ui/view'
        >>> path_to_module_name("index.js")
        'index'
        >>> path_to_module_name(Path("core/a.b.ts"))
        'core/a.b'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    normalized = _normalize_separators(path_str)

    head, sep, tail = normalized.rpartition("/")
    stem, dot, _ext = tail.rpartition(".")
    # Dotfiles such as ".eslintrc" keep their name.
    if dot and stem:
        tail = stem
    return f"{head}{sep}{tail}"


def extract_prefix(module_name: str) -> str:
    """Return the directory prefix that owns a logical module name.

    A name without a directory part (a root-level file) is its own prefix.

    Examples:
        >>> extract_prefix("core/services/user")
        'core/services'
        >>> extract_prefix("index")
        'index'
        >>> extract_prefix("ui\\\\widgets\\\\button")
        'ui/widgets'
    """
    normalized = _normalize_separators(module_name)
    directory = str(PurePosixPath(normalized).parent)

    if directory in {".", "", "/"}:
        return normalized

    return directory


__all__ = ["extract_prefix", "path_to_module_name"]
