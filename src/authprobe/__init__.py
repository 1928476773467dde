# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
authprobe package entrypoint.

Debug helpers for bearer-token authenticated APIs: ``AuthProbe`` sends
authenticated GETs and reports every response (401/403 included) as a result,
``start_capture`` runs a local page for an authorization redirect to land on,
and ``convert_file`` turns Turtle vocabularies into JSON-LD for code generation.
HTTP behavior sits behind an injectable async client interface.
"""

from .capture import CallbackCapture, CaptureHandle, start_capture
from .config import (
    CaptureSettings,
    Credentials,
    ProbeSettings,
    load_capture_settings,
    load_credentials,
    load_probe_settings,
)
from .convert import convert_file, ttl_to_jsonld
from .errors import AuthProbeError, BindError, ConfigurationError, ErrorCategory, NetworkError, TransformError
from .http import AsyncHttpClient, AsyncHttpxClient, HttpRequest, HttpResponse, create_default_http_client
from .log import setup_logging
from .models import CaptureRequest, ProbeOutcome, ProbeResult, ProbeTarget, StaticDocument
from .probe import AuthProbe
from .utils.redact import token_preview
from .version import __version__

__all__ = [
    "AsyncHttpClient",
    "AsyncHttpxClient",
    "AuthProbe",
    "AuthProbeError",
    "BindError",
    "CallbackCapture",
    "CaptureHandle",
    "CaptureRequest",
    "CaptureSettings",
    "ConfigurationError",
    "Credentials",
    "ErrorCategory",
    "HttpRequest",
    "HttpResponse",
    "NetworkError",
    "ProbeOutcome",
    "ProbeResult",
    "ProbeSettings",
    "ProbeTarget",
    "StaticDocument",
    "TransformError",
    "convert_file",
    "create_default_http_client",
    "load_capture_settings",
    "load_credentials",
    "load_probe_settings",
    "setup_logging",
    "start_capture",
    "token_preview",
    "__version__",
]
