"""Canonical JSON output — one dump path for the cache and the CLI.

Guarantees:
  - Pretty output (two-space indent) with a trailing newline
  - ``Path`` objects → POSIX strings, tuples/sets → lists
  - Dataclasses → dicts (via ``dataclasses.asdict``)
  - Atomic file replacement for on-disk artifacts
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping


def _to_builtin(obj: Any) -> Any:
    """Convert common non-JSON types into JSON-safe builtins."""
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Path):
        return obj.as_posix()
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_builtin(asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_to_builtin(v) for v in obj]
    return str(obj)


def stable_json_dumps(obj: Any, *, indent: int | None = 2, sort_keys: bool = False) -> str:
    """Serialise *obj* for humans: indented, UTF-8 preserved, newline at EOF.

    Key order is kept unless *sort_keys* is set so rule records read in
    their natural ``id, name, description, ...`` order.
    """
    s = json.dumps(
        _to_builtin(obj),
        indent=indent,
        sort_keys=sort_keys,
        ensure_ascii=False,
    )
    return s + "\n"


def write_json_atomic(path: Path, obj: Any) -> None:
    """Write *obj* to *path* through a sibling temp file and ``os.replace``.

    Raises ``OSError`` on failure; the temp file never outlives the call.
    """
    payload = stable_json_dumps(obj)
    fd, tmp_name = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
