# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bearer-token probe: authenticated GETs against one base URL, one structured result per path."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable

from .config import ProbeSettings, load_probe_settings
from .errors import ConfigurationError, ErrorCategory, NetworkError, categorize_exception
from .http.client import AsyncHttpClient, create_default_http_client
from .http.models import HttpRequest
from .http.url import is_absolute_http_url, normalize_base_url
from .models.probe import ProbeOutcome, ProbeResult, ProbeTarget
from .utils.redact import redact_authorization, token_preview

logger = logging.getLogger(__name__)


class AuthProbe:
    """
    Issues ``GET {base_url}{path}`` with ``Authorization: Bearer {token}``.

    Every HTTP status is a valid probe result; a 401/403 is exactly what the tool
    is for. Only transport failures raise ``NetworkError``. Requests are never
    retried and ``check_all`` keeps one request in flight at a time.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float | None = None,
        settings: ProbeSettings | None = None,
        http_client: AsyncHttpClient | None = None,
    ):
        if not base_url or not str(base_url).strip():
            raise ConfigurationError("base URL is empty")
        if not is_absolute_http_url(base_url):
            raise ConfigurationError(f"base URL is not an absolute http(s) URL: {base_url!r}")
        if token is None or not str(token).strip():
            raise ConfigurationError("bearer token is empty")
        if timeout is not None and timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout!r}")

        self.settings = settings or load_probe_settings()
        self.base_url = normalize_base_url(base_url)
        self.timeout = timeout if timeout is not None else self.settings.timeout
        self._token = str(token).strip()
        self._owns_client = http_client is None
        self.http_client = http_client or create_default_http_client(self.settings)

    @classmethod
    def configure(cls, base_url: str, token: str, **kwargs) -> AuthProbe:
        return cls(base_url, token, **kwargs)

    @property
    def token_preview(self) -> str:
        return token_preview(self._token, self.settings.token_preview_chars)

    @property
    def target(self) -> ProbeTarget:
        return ProbeTarget(base_url=self.base_url)

    def __repr__(self) -> str:
        return f"AuthProbe(base_url={self.base_url!r}, token={self.token_preview!r})"

    def _build_request(self, url: str) -> HttpRequest:
        return HttpRequest(
            url=url,
            method="GET",
            headers={"Authorization": f"Bearer {self._token}"},
            timeout=self.timeout,
        )

    async def check(self, path: str) -> ProbeResult:
        """Send one authenticated GET. Raises ``NetworkError`` if no response was received."""
        if not path:
            raise ConfigurationError("probe path is empty")

        url = self.target.url_for(path)
        request = self._build_request(url)
        logger.debug(
            "GET %s (Authorization: %s)",
            url,
            redact_authorization(request.headers["Authorization"], self.settings.token_preview_chars),
        )

        try:
            response = await self.http_client.request(request)
        except NetworkError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise NetworkError(
                str(exc) or type(exc).__name__,
                path=path,
                url=url,
                category=categorize_exception(exc),
                error_type=type(exc).__name__,
            ) from exc

        if not response.ok or response.status_code is None:
            raise NetworkError(
                response.error_message or "no response received",
                path=path,
                url=url,
                category=response.error_category or ErrorCategory.UNKNOWN_ERROR,
                error_type=response.error_type,
            )

        logger.debug("GET %s -> %s", url, response.status_code)
        return ProbeResult.from_response(path, url, response)

    async def check_all(self, paths: Iterable[str]) -> AsyncIterator[ProbeOutcome]:
        """
        Yield one ``ProbeOutcome`` per path, in input order.

        Each call starts a fresh iteration over a snapshot of ``paths``. A
        ``NetworkError`` is recorded for its own path and the next path is still tried.
        """
        for path in tuple(paths):
            try:
                result = await self.check(path)
            except NetworkError as exc:
                logger.warning("Probe failed for %s: %s", path, exc)
                yield ProbeOutcome.failure(path, exc)
            else:
                yield ProbeOutcome.success(result)

    async def collect(self, paths: Iterable[str]) -> list[ProbeOutcome]:
        return [outcome async for outcome in self.check_all(paths)]

    async def close(self) -> None:
        if self._owns_client and hasattr(self.http_client, "close"):
            await self.http_client.close()

    async def __aenter__(self) -> AuthProbe:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.close()


__all__ = ["AuthProbe"]
