# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .client import AsyncHttpClient, create_default_http_client
from .headers import header_value, header_values
from .httpx_client import AsyncHttpxClient
from .models import HeaderPairs, HttpRequest, HttpResponse
from .url import is_absolute_http_url, join_url, normalize_base_url

__all__ = [
    "AsyncHttpClient",
    "AsyncHttpxClient",
    "HeaderPairs",
    "HttpRequest",
    "HttpResponse",
    "create_default_http_client",
    "header_value",
    "header_values",
    "is_absolute_http_url",
    "join_url",
    "normalize_base_url",
]
