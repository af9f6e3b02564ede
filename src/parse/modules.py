"""Build module records from source files."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.loader import DEFAULT_EXTENSIONS, DircycleConfig
from graph.models import ModuleDependency, ModuleInfo
from parse.imports import extract_imports
from parse.resolve import is_local_import, resolve_import_path
from scan.files import find_source_files
from utils import path_to_module_name

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


def extract_dependencies(
    text: str,
    file_path: Path,
    base_dir: Path,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> list[ModuleDependency]:
    """Return the resolvable local imports declared in ``text``.

    Imports that are not local or do not resolve to a file under
    ``base_dir`` are dropped.
    """
    source_module = path_to_module_name(file_path.relative_to(base_dir))
    dependencies: list[ModuleDependency] = []

    for raw in extract_imports(text):
        if not is_local_import(raw.specifier):
            continue
        target = resolve_import_path(raw.specifier, file_path, base_dir, extensions)
        if target is None:
            logger.debug(
                "%s:%d: unresolved import %r", source_module, raw.line, raw.specifier
            )
            continue
        dependencies.append(
            ModuleDependency(
                from_module=source_module,
                to=target,
                import_type=raw.import_type,
                line=raw.line,
            )
        )

    return dependencies


def parse_file(
    file_path: Path,
    base_dir: Path,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> ModuleInfo | None:
    """Parse one source file into a module record.

    Returns None, after logging a warning, when the file cannot be read or
    decoded; such files are left out of the analysis.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to parse file %s: %s", file_path, exc)
        return None

    return ModuleInfo.create(
        path=file_path.as_posix(),
        name=path_to_module_name(file_path.relative_to(base_dir)),
        dependencies=extract_dependencies(text, file_path, base_dir, extensions),
    )


def parse_directory(
    directory: Path,
    *,
    config: DircycleConfig | None = None,
) -> list[ModuleInfo]:
    """Parse every source file under ``directory`` in deterministic order."""
    if config is None:
        config = DircycleConfig()

    base_dir = directory.expanduser().resolve()
    if not base_dir.is_dir():
        msg = f"Source directory does not exist: {directory}"
        raise NotADirectoryError(msg)

    modules: list[ModuleInfo] = []
    for file_path in find_source_files(
        base_dir,
        extensions=config.extensions,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        skip_dirs=config.skip_dirs,
        nested_gitignore=config.nested_gitignore,
    ):
        module = parse_file(file_path, base_dir, config.extensions)
        if module is not None:
            modules.append(module)

    logger.debug("Parsed %d modules under %s", len(modules), base_dir)
    return modules


__all__ = ["extract_dependencies", "parse_directory", "parse_file"]
