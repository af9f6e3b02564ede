"""Line-oriented import scanning for JavaScript and TypeScript sources."""

from __future__ import annotations

import re
from typing import NamedTuple

from graph.models import ImportKind

# import x from './x';  import { a, b } from "../y";  import './side-effect'
_STATIC_IMPORT = re.compile(r"""^import\s+(?:[\w*\s{},]*\s+from\s+)?['"](.*?)['"];?$""")
# const x = require('./x')
_REQUIRE = re.compile(r"""(?:const|let|var)\s+.*?=\s*require\(['"](.*?)['"]?\)""")
# await import('./x')
_DYNAMIC_IMPORT = re.compile(r"""import\(['"](.*?)['"]?\)""")

_PATTERNS: tuple[tuple[ImportKind, re.Pattern[str]], ...] = (
    ("import", _STATIC_IMPORT),
    ("require", _REQUIRE),
    ("dynamic", _DYNAMIC_IMPORT),
)


class RawImport(NamedTuple):
    """An import specifier exactly as written in the source."""

    specifier: str
    import_type: ImportKind
    line: int


def extract_imports(text: str) -> list[RawImport]:
    """Extract import specifiers from source text.

    Args:
        text: Full source text of a module

    Returns:
        Imports in line order. Within one line, static imports come first,
        then ``require`` calls, then dynamic ``import()`` calls.
    """
    imports: list[RawImport] = []

    for index, raw_line in enumerate(text.split("\n")):
        line = raw_line.rstrip("\r")
        for import_type, pattern in _PATTERNS:
            for match in pattern.finditer(line):
                imports.append(RawImport(match.group(1), import_type, index + 1))

    return imports


__all__ = ["RawImport", "extract_imports"]
