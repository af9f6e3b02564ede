"""Import scanning and module parsing for dircycle."""

from parse.imports import RawImport, extract_imports
from parse.modules import extract_dependencies, parse_directory, parse_file
from parse.resolve import is_local_import, resolve_import_path

__all__ = [
    "RawImport",
    "extract_dependencies",
    "extract_imports",
    "is_local_import",
    "parse_directory",
    "parse_file",
    "resolve_import_path",
]
