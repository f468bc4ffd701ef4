"""JSON file storage for target snapshots."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from nutrition_targets.services.targets import TargetStorage


@dataclass
class JsonFileTargetStorage(TargetStorage):
    """Stores each key as a JSON document under a data directory."""

    data_dir: Path

    def load(self, key: str) -> dict[str, object] | None:
        """Return the stored snapshot, or None when the file is absent."""
        path = self._path_for(key)
        if not path.exists():
            return None
        payload = json.loads(path.read_text(encoding="utf-8"))
        return payload if isinstance(payload, dict) else None

    def save(self, key: str, snapshot: dict[str, object]) -> None:
        """Write the snapshot atomically."""
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(
            json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        os.replace(tmp_path, path)

    def _path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"
