# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""authprobe-capture CLI: serve a page locally while a browser completes an authorization redirect."""

from __future__ import annotations

import argparse
import asyncio
import sys

from ..capture import start_capture
from ..config import CaptureSettings, load_capture_settings
from ..errors import BindError, ConfigurationError
from ..log import setup_logging
from ..models.capture import CaptureRequest, StaticDocument

EXIT_OK = 0
EXIT_BIND_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser(settings: CaptureSettings | None = None) -> argparse.ArgumentParser:
    settings = settings or load_capture_settings()
    parser = argparse.ArgumentParser(description="Serve one HTML document for an OAuth redirect to land on")
    parser.add_argument("document", help="File served for the accepted paths")
    parser.add_argument("--host", default=settings.host, help=f"Listen address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Listen port (default: {settings.port})")
    parser.add_argument(
        "--path",
        dest="paths",
        action="append",
        help="Accepted path; repeat for several (default: /, /callback and /<document name>)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_request(request: CaptureRequest) -> None:
    suffix = f"?{request.query}" if request.query else ""
    print(f"[Server] {request.method} {request.path}{suffix}", flush=True)


async def serve(document: StaticDocument, host: str, port: int, paths: list[str] | None) -> None:
    handle = await start_capture(host, port, document, paths, on_request=_print_request)
    async with handle:
        print(f"Capture server running at {handle.url}")
        print(f"Callback URL: {handle.callback_url}")
        print(f"Open {handle.url} in your browser.", flush=True)
        await handle.wait_closed()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        document = StaticDocument.from_path(args.document)
    except OSError as exc:
        print(f"authprobe-capture: cannot read document {args.document}: {exc.strerror or exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        asyncio.run(serve(document, args.host, args.port, args.paths))
    except ConfigurationError as exc:
        print(f"authprobe-capture: configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except BindError as exc:
        print(f"authprobe-capture: {exc}", file=sys.stderr)
        return EXIT_BIND_ERROR
    except KeyboardInterrupt:
        pass
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
