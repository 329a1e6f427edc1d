"""JSON table persistence shared by the repositories.

Each table is a JSON list of row dicts in its own file under the data
directory. Writes go through a temp file and a move so readers never see a
half-written table; a process-wide lock serialises read-modify-write cycles.
"""
import json
import os
import shutil
import tempfile
import logging
from pathlib import Path
from threading import RLock
from typing import Callable, Dict, List, Optional

from diet.infra.paths import DATA_DIR

logger = logging.getLogger(__name__)

_lock = RLock()


class JsonStore:
    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

    @property
    def lock(self) -> RLock:
        return _lock

    def _path(self, table: str) -> Path:
        return self.data_dir / table

    def load(self, table: str) -> List[Dict]:
        path = self._path(table)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                rows = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {path}: {e}")
            return []
        if not isinstance(rows, list):
            logger.error(f"Table {path} is not a list; ignoring its content")
            return []
        return rows

    def save(self, table: str, rows: List[Dict]) -> None:
        path = self._path(table)
        os.makedirs(path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(rows, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def insert(self, table: str, row: Dict) -> Dict:
        with _lock:
            rows = self.load(table)
            rows.append(row)
            self.save(table, rows)
        return row

    def select(self, table: str, where: Callable[[Dict], bool]) -> List[Dict]:
        with _lock:
            return [r for r in self.load(table) if where(r)]

    def update(self, table: str, where: Callable[[Dict], bool], changes: Dict) -> List[Dict]:
        """Apply changes to matching rows; returns the updated rows."""
        with _lock:
            rows = self.load(table)
            updated = []
            for r in rows:
                if where(r):
                    r.update(changes)
                    updated.append(r)
            if updated:
                self.save(table, rows)
        return updated

    def delete(self, table: str, where: Callable[[Dict], bool]) -> int:
        with _lock:
            rows = self.load(table)
            kept = [r for r in rows if not where(r)]
            removed = len(rows) - len(kept)
            if removed:
                self.save(table, kept)
        return removed
