# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the probe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory

HeaderPairs = tuple[tuple[str, str], ...]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by AsyncHttpClient implementations."""

    url: str
    method: str = "GET"
    headers: dict[str, str] | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    ``ok`` only means the exchange completed; ``status_code`` may be anything.
    When ``ok`` is False the error fields describe the transport failure.
    """

    ok: bool
    status_code: int | None = None
    headers: HeaderPairs = ()
    text: str = ""
    content: bytes = b""
    url: str | None = None
    elapsed: float | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory | None = None
    meta: dict[str, Any] = field(default_factory=dict)
