"""Naming-convention reconciliation between camelCase fields and snake_case keys."""

from __future__ import annotations

import re

_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def camel_to_snake(name: str) -> str:
    """Translate a lower-camel-case identifier to snake_case.

    A separator is inserted only where a lowercase letter is immediately
    followed by an uppercase one, then the whole string is lowercased:
    ``userId`` -> ``user_id``. Runs of capitals are not split, so
    ``parseHTTPRequest`` becomes ``parse_httprequest``.
    """
    return _BOUNDARY.sub(r"\1_\2", name).lower()
