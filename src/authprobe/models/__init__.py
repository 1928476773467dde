# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for authprobe."""

from ..http.models import HeaderPairs, HttpRequest, HttpResponse
from .capture import CaptureRequest, StaticDocument
from .probe import ProbeOutcome, ProbeResult, ProbeTarget

__all__ = [
    "CaptureRequest",
    "HeaderPairs",
    "HttpRequest",
    "HttpResponse",
    "ProbeOutcome",
    "ProbeResult",
    "ProbeTarget",
    "StaticDocument",
]
