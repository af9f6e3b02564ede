"""Resolve import specifiers to logical module names."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from utils import path_to_module_name

if TYPE_CHECKING:
    from collections.abc import Sequence


def is_local_import(specifier: str) -> bool:
    """Return True for specifiers that may refer to a file in the analyzed tree.

    Relative paths always qualify. Bare single-segment names (``"config"``)
    qualify too and are looked up from the base directory; scoped packages
    (``"@org/pkg"``) and deep package paths (``"lodash/fp"``) do not.

    Examples:
        >>> is_local_import("./util")
        True
        >>> is_local_import("shared")
        True
        >>> is_local_import("@scope/pkg")
        False
    """
    if specifier.startswith(("./", "../")):
        return True
    return not specifier.startswith("@") and "/" not in specifier


def _module_name_within(base_dir: Path, path: Path) -> str | None:
    relative = os.path.relpath(path, base_dir)
    if relative in {os.curdir, os.pardir} or relative.startswith(os.pardir + os.sep):
        return None
    return path_to_module_name(Path(relative))


def resolve_import_path(
    specifier: str,
    current_file: Path,
    base_dir: Path,
    extensions: Sequence[str],
) -> str | None:
    """Resolve an import specifier to the logical name of the imported module.

    Args:
        specifier: Import specifier as written (e.g. ``"../core/user"``)
        current_file: File containing the import
        base_dir: Root of the analyzed tree; module names are relative to it
        extensions: Candidate file extensions in priority order

    Returns:
        The target's logical module name, or None when no file matches or the
        target lies outside ``base_dir``. A directory resolved through its
        ``index`` file is named after the directory itself.
    """
    if specifier.startswith(("./", "../")):
        candidate = current_file.parent / specifier
    else:
        candidate = base_dir / specifier
    resolved = Path(os.path.normpath(candidate))

    for ext in extensions:
        full_path = resolved.with_name(resolved.name + ext)
        if full_path.is_file():
            return _module_name_within(base_dir, full_path)

    for ext in extensions:
        if (resolved / f"index{ext}").is_file():
            return _module_name_within(base_dir, resolved)

    # Specifiers that already carry a known extension, e.g. "./util.js".
    if resolved.suffix in extensions and resolved.is_file():
        return _module_name_within(base_dir, resolved)

    return None


__all__ = ["is_local_import", "resolve_import_path"]
