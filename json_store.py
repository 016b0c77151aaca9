from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for missing files, empty files, or invalid JSON.
    """
    try:
        if not path.exists():
            return None
        raw = path.read_text(encoding="utf-8")
        if not raw.strip():
            return None
        return json.loads(raw)
    except (OSError, ValueError) as e:
        logger.warning("JSON READ: failed to read %s: %r", path, e)
        return None


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2, sort_keys: bool = False) -> None:
    """
    Atomically write pretty-printed JSON by writing to a temp file then replacing.

    Key order is preserved unless sort_keys is set.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=indent, sort_keys=sort_keys, ensure_ascii=False)
        f.write("\n")
    tmp_path.replace(path)
