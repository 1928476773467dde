# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Callback capture models."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from ..http.models import HeaderPairs

DEFAULT_CONTENT_TYPE = "text/html"


@dataclass(frozen=True)
class CaptureRequest:
    method: str
    path: str
    query: str = ""
    headers: HeaderPairs = ()


@dataclass(frozen=True)
class StaticDocument:
    """Bytes served verbatim by the capture listener."""

    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE
    name: str = "index.html"

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> StaticDocument:
        file_path = Path(path)
        guessed, _ = mimetypes.guess_type(file_path.name)
        return cls(
            content=file_path.read_bytes(),
            content_type=content_type or guessed or DEFAULT_CONTENT_TYPE,
            name=file_path.name,
        )

    @classmethod
    def from_text(cls, text: str, name: str = "index.html", content_type: str = DEFAULT_CONTENT_TYPE) -> StaticDocument:
        return cls(content=text.encode("utf-8"), content_type=content_type, name=name)

    def default_paths(self) -> tuple[str, ...]:
        """Root, the callback path and the document's own path."""
        paths = ["/", "/callback"]
        own = f"/{self.name}" if self.name else ""
        if own and own not in paths:
            paths.append(own)
        return tuple(paths)
