# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe target/result models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import NetworkError
from ..http.headers import header_value
from ..http.models import HeaderPairs, HttpResponse
from ..http.url import join_url

AUTH_FAILURE_STATUSES = frozenset({401, 403})


@dataclass(frozen=True)
class ProbeTarget:
    base_url: str
    paths: tuple[str, ...] = ()

    def url_for(self, path: str) -> str:
        return join_url(self.base_url, path)

    def urls(self) -> list[str]:
        return [self.url_for(path) for path in self.paths]


@dataclass(frozen=True)
class ProbeResult:
    """What the server said for one path. 4xx/5xx responses are results, not errors."""

    path: str
    url: str
    status_code: int
    headers: HeaderPairs = ()
    text: str = ""
    elapsed: float | None = None
    truncated: bool = False

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in AUTH_FAILURE_STATUSES

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    @classmethod
    def from_response(cls, path: str, url: str, response: HttpResponse) -> ProbeResult:
        return cls(
            path=path,
            url=url,
            status_code=int(response.status_code or 0),
            headers=tuple(response.headers),
            text=response.text,
            elapsed=response.elapsed,
            truncated=bool((response.meta or {}).get("body_truncated")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "url": self.url,
            "status_code": self.status_code,
            "headers": [list(pair) for pair in self.headers],
            "body": self.text,
            "elapsed": self.elapsed,
            "truncated": self.truncated,
        }


@dataclass(frozen=True)
class ProbeOutcome:
    """Per-path entry produced by ``AuthProbe.check_all``: exactly one of result/error is set."""

    path: str
    result: ProbeResult | None = None
    error: NetworkError | None = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("ProbeOutcome needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: ProbeResult) -> ProbeOutcome:
        return cls(path=result.path, result=result)

    @classmethod
    def failure(cls, path: str, error: NetworkError) -> ProbeOutcome:
        return cls(path=path, error=error)

    def to_dict(self) -> dict[str, Any]:
        if self.result is not None:
            return {"ok": True, "path": self.path, "result": self.result.to_dict()}
        if self.error is not None:
            return {"ok": False, "path": self.path, "error": self.error.to_dict()}
        raise ValueError("ProbeOutcome needs exactly one of result or error")
