import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Tuple
from app.models.activity_log_models import LogEntry

logger = logging.getLogger(__name__)

ACTIVITY_LOG_CAPACITY = 50
RECENT_LOGS_LIMIT = 20


class ActivityLogService:
    """Bounded in-memory record of recent monitor activity.

    One instance is owned by the application and handed to every component that reports activity.
    Entries are volatile: nothing survives a restart. Once the log holds `capacity` entries,
    each new entry evicts the oldest one.
    """

    def __init__(self, capacity: int = ACTIVITY_LOG_CAPACITY):
        self.capacity = capacity
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        # requests may append from several threads at once (sync routes run in a threadpool)
        self._lock = threading.Lock()

    def add(self, message: str) -> LogEntry:
        """Append a timestamped entry and mirror it to the standard logger"""

        entry = LogEntry(timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds"), message=message)
        with self._lock:
            self._entries.append(entry)
        logger.info(f"[{entry.timestamp}] {message}")
        return entry

    def entries(self) -> List[LogEntry]:
        """All retained entries, oldest first"""
        with self._lock:
            return list(self._entries)

    def recent(self, limit: int = RECENT_LOGS_LIMIT) -> Tuple[List[LogEntry], int]:
        """Last `limit` entries (oldest first) and the total number retained"""
        with self._lock:
            total = len(self._entries)
            start = max(total - limit, 0)
            return [self._entries[i] for i in range(start, total)], total

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
