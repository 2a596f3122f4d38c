"""
JSON-file document store.

Each store keeps one collection of documents (dicts keyed by ``id``) in a
single JSON file. Reads and writes go through a lock because FastAPI runs
sync dependencies and endpoints in a threadpool.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)


class JsonDocumentStore:
    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _read(self) -> Dict[str, Dict[str, Any]]:
        try:
            if not self.path.exists():
                return {}
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top-level value is not an object")
            return data
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, starting empty: %s", self.path, e)
            return {}

    def _write(self, docs: Dict[str, Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(
            json.dumps(docs, ensure_ascii=False, indent=2, default=str),
            encoding="utf-8",
        )
        tmp.replace(self.path)
