"""Serialization helpers for report output."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pydantic import BaseModel


def _to_dict(model: BaseModel) -> dict[str, object]:
    """Convert a report model to JSON-ready data using its wire aliases."""
    return model.model_dump(mode="json", by_alias=True)


def _dumps_json(model: BaseModel) -> bytes:
    payload = _to_dict(model)
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
    return orjson.dumps(payload, option=opts)
