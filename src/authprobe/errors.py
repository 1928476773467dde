# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from pathlib import Path

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def _has_cause(exc: BaseException, types: tuple[type[BaseException], ...]) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, types):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps the underlying socket/ssl errors, so the cause chain is checked
    before falling back on the httpx class.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if _has_cause(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if _has_cause(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Connection failed",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Request could not be completed",
    }
    return mapping.get(category, "Request could not be completed")


class AuthProbeError(Exception):
    """Base class for every error raised by authprobe."""


class ConfigurationError(AuthProbeError, ValueError):
    """Invalid or missing base URL, token, port or path."""


class NetworkError(AuthProbeError):
    """A probe request could not be completed (timeout, DNS, refused connection, TLS)."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        url: str | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        error_type: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.url = url
        self.category = category
        self.error_type = error_type

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)

    def __str__(self) -> str:
        target = self.url or self.path
        prefix = f"GET {target}: " if target else ""
        return f"{prefix}{self.reason} ({self.message})" if self.message else f"{prefix}{self.reason}"

    def to_dict(self) -> dict[str, str | None]:
        return {
            "path": self.path,
            "url": self.url,
            "category": self.category.value,
            "reason": self.reason,
            "error_type": self.error_type,
            "message": self.message,
        }


class BindError(AuthProbeError, OSError):
    """The capture listener could not bind its address."""

    def __init__(self, message: str, *, host: str, port: int):
        super().__init__(message)
        self.host = host
        self.port = port

    def __str__(self) -> str:
        return f"cannot listen on {self.host}:{self.port}: {self.args[0]}"


class TransformError(AuthProbeError):
    """The Turtle to JSON-LD conversion failed for one input."""

    def __init__(self, message: str, *, source: str | Path):
        super().__init__(message)
        self.source = str(source)

    def __str__(self) -> str:
        return f"{self.source}: {self.args[0]}"


__all__ = [
    "AuthProbeError",
    "BindError",
    "ConfigurationError",
    "ErrorCategory",
    "NetworkError",
    "TransformError",
    "categorize_exception",
    "error_category_to_reason",
]
