# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for authprobe."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"authprobe/{__version__}"
DEFAULT_CAPTURE_HOST = "127.0.0.1"
DEFAULT_CAPTURE_PORT = 19287

# First match wins; the second names are what the older debug scripts read from .env.
TOKEN_ENV_VARS = ("AUTHPROBE_TOKEN", "AIP_TOKEN")
BASE_URL_ENV_VARS = ("AUTHPROBE_BASE_URL", "HAPPYVIEW_URL")


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ProbeSettings:
    """HTTP defaults for AuthProbe."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024
    token_preview_chars: int = 10

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("AUTHPROBE_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_body_bytes = _int_env("AUTHPROBE_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=timeout,
            user_agent=os.getenv("AUTHPROBE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("AUTHPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("AUTHPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
            token_preview_chars=max(0, _int_env("AUTHPROBE_TOKEN_PREVIEW_CHARS", cls.token_preview_chars)),
        )


@dataclass
class CaptureSettings:
    """Listener defaults for CallbackCapture."""

    host: str = DEFAULT_CAPTURE_HOST
    port: int = DEFAULT_CAPTURE_PORT

    @classmethod
    def from_env(cls) -> "CaptureSettings":
        return cls(
            host=os.getenv("AUTHPROBE_CAPTURE_HOST", cls.host),
            port=_int_env("AUTHPROBE_CAPTURE_PORT", cls.port),
        )


@dataclass(frozen=True)
class Credentials:
    """Token and base URL as found in the environment. Values are not validated here."""

    token: str | None = None
    base_url: str | None = None


def _first_value(env: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = (env.get(name) or "").strip()
        if value:
            return value
    return None


def load_credentials(env: Mapping[str, str] | None = None) -> Credentials:
    """Read the bearer token and base URL from ``env`` (defaults to ``os.environ``)."""
    source = os.environ if env is None else env
    return Credentials(
        token=_first_value(source, TOKEN_ENV_VARS),
        base_url=_first_value(source, BASE_URL_ENV_VARS),
    )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()


def load_capture_settings() -> CaptureSettings:
    return CaptureSettings.from_env()
