# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""authprobe CLI: send bearer-authenticated GETs and print what came back."""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from ..config import Credentials, ProbeSettings, load_credentials, load_probe_settings
from ..errors import ConfigurationError
from ..log import setup_logging
from ..models.probe import ProbeOutcome
from ..probe import AuthProbe
from ..utils.redact import token_preview

DEFAULT_PATHS = ("/admin/admins", "/admin/stats")
DEFAULT_ENV_FILE = ".env"
CLI_TEXT_TRUNCATION_BYTES = 4096

EXIT_OK = 0
EXIT_PROBE_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Probe an API with a bearer token and print status, headers and body per path")
    parser.add_argument("paths", nargs="*", help=f"Paths to GET (default: {' '.join(DEFAULT_PATHS)})")
    parser.add_argument("--base-url", help="Base URL (default: AUTHPROBE_BASE_URL or HAPPYVIEW_URL)")
    parser.add_argument("--token", help="Bearer token (default: AUTHPROBE_TOKEN or AIP_TOKEN)")
    parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        help="Read missing settings from this dotenv file if it exists (default: .env)",
    )
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of human-friendly text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _environment(env_file: str | None) -> Mapping[str, str]:
    """Process environment layered over the dotenv file; real env vars win."""
    merged: dict[str, str] = {}
    if env_file and Path(env_file).is_file():
        merged.update({key: value for key, value in dotenv_values(env_file).items() if value is not None})
    merged.update(os.environ)
    return merged


def resolve_credentials(args: argparse.Namespace) -> Credentials:
    from_env = load_credentials(_environment(args.env_file))
    return Credentials(
        token=args.token or from_env.token,
        base_url=args.base_url or from_env.base_url,
    )


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    keep = max(0, max_bytes - len(suffix.encode("utf-8")))
    return raw[:keep].decode("utf-8", errors="ignore") + suffix


def _print_json(outcomes: list[ProbeOutcome], probe: AuthProbe) -> None:
    payload: dict[str, Any] = {
        "base_url": probe.base_url,
        "token": probe.token_preview,
        "results": [outcome.to_dict() for outcome in outcomes],
    }
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(outcome: ProbeOutcome) -> None:
    if outcome.error is not None:
        error = outcome.error
        print(f"\nGET {error.url or outcome.path}")
        print(f"Error: {error.reason} [{error.category.value}] {error.message}")
        return

    result = outcome.result
    if result is None:
        return
    print(f"\nGET {result.url}")
    print(f"Status: {result.status_code}")
    print("Headers:")
    for name, value in result.headers:
        print(f"  {name}: {value}")
    print(f"Body: {_truncate_text_bytes(result.text, CLI_TEXT_TRUNCATION_BYTES)}")
    if result.truncated:
        print("Note: body exceeded AUTHPROBE_HTTP_MAX_BODY_BYTES and was cut off")
    if result.is_auth_failure:
        print(f"Note: server rejected the credential ({result.status_code})")


async def run_probes(probe: AuthProbe, paths: list[str], *, as_json: bool) -> list[ProbeOutcome]:
    outcomes: list[ProbeOutcome] = []
    async with probe:
        async for outcome in probe.check_all(paths):
            outcomes.append(outcome)
            if not as_json:
                _pretty_print(outcome)
    return outcomes


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    credentials = resolve_credentials(args)
    settings: ProbeSettings = load_probe_settings()
    paths = list(args.paths or DEFAULT_PATHS)

    if not args.json:
        print(f"Token: {token_preview(credentials.token, settings.token_preview_chars)}")

    async def _run() -> tuple[AuthProbe, list[ProbeOutcome]]:
        probe = AuthProbe.configure(
            credentials.base_url or "",
            credentials.token or "",
            timeout=args.timeout,
            settings=settings,
        )
        return probe, await run_probes(probe, paths, as_json=args.json)

    try:
        probe, outcomes = asyncio.run(_run())
    except ConfigurationError as exc:
        print(f"authprobe: configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.json:
        _print_json(outcomes, probe)

    return EXIT_OK if all(outcome.ok for outcome in outcomes) else EXIT_PROBE_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
