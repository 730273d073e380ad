"""Custom column types."""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy import Text
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


def serialize_list(value: Any) -> str:
    """Serialize ``value`` as a JSON array of strings.

    ``None`` becomes ``[]`` and a bare string becomes a one-element list, so the
    stored text is always an array.
    """
    if value is None:
        items: list[str] = []
    elif isinstance(value, str):
        items = [value]
    else:
        items = [str(item) for item in value]
    return json.dumps(items)


def deserialize_list(raw: Any) -> list[str]:
    """Parse stored text back into a list, defaulting to ``[]`` on bad data."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return [str(item) for item in raw]
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Discarding unparseable list column value: %.80r", raw)
        return []
    if not isinstance(parsed, list):
        logger.warning("Discarding non-list column value: %.80r", raw)
        return []
    return [str(item) for item in parsed]


class JSONList(TypeDecorator[list[str]]):
    """Ordered list of strings persisted as JSON text.

    Reads never raise: malformed or legacy rows come back as an empty list.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str:
        return serialize_list(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> list[str]:
        return deserialize_list(value)
