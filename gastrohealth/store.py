# -*- coding: utf-8 -*-
"""Flat-file JSON store.

The whole database is one JSON document keyed by user email:

    {"user@example.com": {"userProfile": {...} | null, "symptoms": [...]}}

Every write rewrites the full document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from .config import settings

logger = logging.getLogger(__name__)

# Serialises read-modify-write cycles within this process only.
_lock = threading.RLock()


def write_db(data: Dict[str, Any], db_path: Path | None = None) -> None:
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    # mkstemp creates 0600 files; keep the mode the document already had.
    mode = path.stat().st_mode & 0o777 if path.exists() else 0o644
    fd, tmp_name = tempfile.mkstemp(prefix=".db-", suffix=".json", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_db(db_path: Path | None = None) -> Dict[str, Any]:
    """Load the document, creating an empty one when the file does not exist."""
    path = db_path or settings.db_path
    with _lock:
        if not path.exists():
            logger.info("creating empty store at %s", path)
            write_db({}, path)
            return {}
        raw = json.loads(path.read_text(encoding="utf-8") or "{}")
    if not isinstance(raw, dict):
        raise ValueError(f"Store document at {path} is not a JSON object")
    return raw


@contextmanager
def transaction(db_path: Path | None = None) -> Iterator[Dict[str, Any]]:
    """Yield the loaded document and write it back when the block exits cleanly."""
    path = db_path or settings.db_path
    with _lock:
        data = read_db(path)
        yield data
        write_db(data, path)
