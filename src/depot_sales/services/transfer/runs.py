"""Persist export files as run directories under the data root."""

from __future__ import annotations

import logging
from pathlib import Path

from ...persistence.filesystem import FileStorage

logger = logging.getLogger(__name__)


def persist_export(
    kind: str,
    depot: str,
    file_name: str,
    payload: bytes,
    summary: dict,
    *,
    storage: FileStorage | None = None,
) -> Path:
    """Write ``payload`` and a ``summary.json`` into ``outputs/<kind>_<depot>_<timestamp>/``."""
    storage = storage or FileStorage()
    run_dir = storage.make_run_directory(prefix=f"{kind}_{depot}")
    storage.write_bytes(run_dir / file_name, payload)
    storage.write_json(run_dir / "summary.json", {"kind": kind, "depot": depot, "file_name": file_name, **summary})
    logger.info("Persisted %s export for %s to %s", kind, depot, run_dir)
    return run_dir
