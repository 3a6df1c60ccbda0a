"""
Recent extraction history shared by the API endpoints.
Process-local and capped; nothing is written to disk.
"""
import threading
from typing import List

DEFAULT_HISTORY_LIMIT = 5

_history: List[str] = []
_lock = threading.Lock()
_limit = DEFAULT_HISTORY_LIMIT


def set_history_limit(limit: int) -> None:
    """Change the cap, dropping the oldest entries if needed."""
    global _limit
    with _lock:
        _limit = max(1, limit)
        del _history[_limit:]


def add_history(text: str) -> None:
    """Record a submitted text, newest first."""
    if not text or not text.strip():
        return

    with _lock:
        # No consecutive duplicates
        if _history and _history[0] == text:
            return
        _history.insert(0, text)
        del _history[_limit:]


def load_history() -> List[str]:
    """Return a copy of the history, newest first."""
    with _lock:
        return list(_history)


def clear_history() -> None:
    with _lock:
        _history.clear()
