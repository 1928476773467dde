# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for probe targets."""

from __future__ import annotations

from urllib.parse import urlsplit

ALLOWED_SCHEMES = ("http", "https")


def is_absolute_http_url(url: str) -> bool:
    """Return True for ``http(s)://host[:port][/path]`` URLs."""
    raw = str(url or "").strip()
    if not raw or any(ch.isspace() for ch in raw):
        return False
    try:
        parts = urlsplit(raw)
        # Accessing .port validates the numeric range.
        parts.port
    except ValueError:
        return False
    return parts.scheme.lower() in ALLOWED_SCHEMES and bool(parts.hostname)


def normalize_base_url(url: str) -> str:
    """Strip surrounding whitespace and a single trailing slash."""
    raw = str(url or "").strip()
    if raw.endswith("/"):
        raw = raw[:-1]
    return raw


def join_url(base_url: str, path: str) -> str:
    """
    Append ``path`` to ``base_url`` verbatim.

    This is plain concatenation rather than ``urljoin``: the probe must hit exactly
    ``{base}{path}`` so a base with a sub-path (``https://host/api``) keeps it.
    """
    base = normalize_base_url(base_url)
    raw_path = str(path)
    if raw_path and not raw_path.startswith(("/", "?")):
        raw_path = f"/{raw_path}"
    return f"{base}{raw_path}"


__all__ = ["ALLOWED_SCHEMES", "is_absolute_http_url", "join_url", "normalize_base_url"]
