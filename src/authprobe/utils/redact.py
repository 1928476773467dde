# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Credential redaction for diagnostics output."""

from __future__ import annotations

DEFAULT_PREVIEW_CHARS = 10
MISSING = "MISSING"


def token_preview(token: str | None, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """
    Return a bounded prefix of ``token`` followed by ``...``.

    At most half of the token is ever shown, so short tokens are not echoed whole.
    """
    if not token:
        return MISSING
    shown = max(0, min(limit, len(token) // 2))
    return f"{token[:shown]}..."


def redact_authorization(value: str, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Redact the credential part of an ``Authorization`` header value."""
    scheme, _, credential = str(value or "").partition(" ")
    if not credential:
        return token_preview(scheme, limit)
    return f"{scheme} {token_preview(credential, limit)}"


__all__ = ["MISSING", "redact_authorization", "token_preview"]
