from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

STORAGE_PATH = Path(__file__).resolve().parents[3] / "data" / "client_storage.json"


class LocalStorage:
    """String key-value slots kept in one JSON file.

    Every write replaces the whole file through a rename so readers never see
    a half-written file.
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else STORAGE_PATH

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not hold an object")
        return data

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except (ValueError, OSError):
            data = {}
        data[key] = value
        self._write_all(data)

    def _write_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
