# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header helpers.

Responses keep their headers as ordered ``(name, value)`` pairs so repeated fields
(``set-cookie``, ``www-authenticate``) survive intact. Lookups are case-insensitive
(RFC 9110).
"""

from __future__ import annotations

from collections.abc import Iterable


def header_value(headers: Iterable[tuple[str, str]] | None, name: str, default: str = "") -> str:
    """Return the first value for ``name`` using case-insensitive matching."""
    if not headers or not name:
        return default
    lower = str(name).lower()
    for key, value in headers:
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()
    return default


def header_values(headers: Iterable[tuple[str, str]] | None, name: str) -> list[str]:
    """Return every value for ``name`` in the order received."""
    if not headers or not name:
        return []
    lower = str(name).lower()
    return [str(value) for key, value in headers if key is not None and str(key).lower() == lower]


__all__ = ["header_value", "header_values"]
