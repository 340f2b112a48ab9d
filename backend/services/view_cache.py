# backend/services/view_cache.py
import threading
from typing import Any, Callable, Dict, Tuple

from loguru import logger


class ViewCache:
    """Rendered views keyed by path. A revalidated path is rebuilt on next access.

    Each path carries a generation that ``revalidate_path`` bumps (``clear``
    bumps every path). A render that overlapped a revalidation is returned to
    its caller but not stored.
    """

    def __init__(self):
        self._views: Dict[str, Any] = {}
        self._generations: Dict[str, int] = {}
        self._epoch = 0
        self._lock = threading.Lock()

    def _generation(self, path: str) -> Tuple[int, int]:
        return self._epoch, self._generations.get(path, 0)

    def get_or_render(self, path: str, render: Callable[[], Any]) -> Any:
        with self._lock:
            if path in self._views:
                return self._views[path]
            generation = self._generation(path)

        view = render()

        with self._lock:
            if self._generation(path) == generation:
                self._views[path] = view
            else:
                logger.info(f"Discarded render of {path} revalidated while rendering")
        return view

    def is_cached(self, path: str) -> bool:
        with self._lock:
            return path in self._views

    def revalidate_path(self, path: str) -> None:
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            dropped = self._views.pop(path, None) is not None
        if dropped:
            logger.info(f"Revalidated cached view {path}")

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._views.clear()
