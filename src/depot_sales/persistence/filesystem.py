"""File-based persistence helpers for store state and export outputs."""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..config import settings

RUN_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S%fZ"


class FileStorage:
    """Thin wrapper around the data root.

    ``state/`` holds one file per storage key; ``outputs/`` holds one
    directory per persisted export.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.state_root = self.root / "state"
        self.output_root.mkdir(parents=True, exist_ok=True)
        self.state_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "export") -> Path:
        timestamp = datetime.now(timezone.utc).strftime(RUN_TIMESTAMP_FORMAT)
        path = self.output_root / f"{prefix}_{timestamp}"
        path.mkdir(parents=True, exist_ok=False)
        return path

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_bytes(self, path: Path, payload: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as handle:
            handle.write(payload)

    def key_path(self, key: str) -> Path:
        return self.state_root / key

    def read_key(self, key: str) -> Optional[str]:
        path = self.key_path(key)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            return handle.read()

    def write_key(self, key: str, value: str) -> None:
        # Written to a uniquely named sibling file, then renamed over the key.
        path = self.key_path(key)
        tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            handle.write(value)
        tmp_path.replace(path)
