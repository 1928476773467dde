# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Turtle to JSON-LD conversion used by code generation."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from rdflib import Graph

from .errors import TransformError

logger = logging.getLogger(__name__)

TTL_SUFFIX = ".ttl"
JSON_SUFFIX = ".json"


def ttl_to_jsonld(text: str) -> str:
    """Parse Turtle ``text`` and return it as indented JSON-LD with a trailing newline."""
    graph = Graph()
    graph.parse(data=text, format="turtle")
    serialized = graph.serialize(format="json-ld")
    return json.dumps(json.loads(serialized), indent=2, ensure_ascii=False) + "\n"


def default_output_path(source: str | Path) -> Path:
    """``vf.TTL`` -> ``vf.json``; inputs without a ``.ttl`` suffix get ``.json`` appended."""
    path = Path(source)
    if path.suffix.lower() == TTL_SUFFIX:
        return path.with_suffix(JSON_SUFFIX)
    return path.with_name(path.name + JSON_SUFFIX)


def _write_atomic(target: Path, text: str) -> None:
    """Write next to ``target`` and rename over it; the temp file is removed on failure."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def convert_file(source: str | Path, output: str | Path | None = None) -> Path:
    """
    Convert ``source`` and write the result to ``output`` (or the default path).

    The whole document is converted in memory and written through a temporary
    file renamed into place, so a failure leaves no partial output behind.
    """
    source_path = Path(source)
    target = Path(output) if output is not None else default_output_path(source_path)

    try:
        text = source_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TransformError(f"cannot read input ({exc.strerror or exc})", source=source_path) from exc

    try:
        converted = ttl_to_jsonld(text)
    except Exception as exc:  # noqa: BLE001
        raise TransformError(f"conversion failed ({exc})", source=source_path) from exc

    try:
        _write_atomic(target, converted)
    except OSError as exc:
        raise TransformError(f"cannot write {target} ({exc.strerror or exc})", source=source_path) from exc
    logger.debug("Wrote %d bytes of JSON-LD to %s", len(converted), target)
    return target


__all__ = ["convert_file", "default_output_path", "ttl_to_jsonld"]
