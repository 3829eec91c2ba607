"""
Bounded in-memory log of recent analyses, served by GET /api/logs.
"""

from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Deque, Dict, List, Optional

from .models import AnalysisResult


class AnalysisHistory:
    def __init__(self, max_size: int = 100):
        self.max_size = max_size
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=max_size)
        self._lock = Lock()

    def add(self, result: AnalysisResult) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "user_input": result.user_input,
            "result": result.to_dict(),
        }
        with self._lock:
            self._entries.append(entry)
        return entry

    def recent(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Newest first."""
        with self._lock:
            entries = list(reversed(self._entries))
        if limit is not None:
            entries = entries[:max(0, limit)]
        return entries

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)
