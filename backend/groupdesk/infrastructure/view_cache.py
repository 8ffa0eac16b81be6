"""View Invalidation — marks rendered views stale after a successful mutation.

Invariants:
    - Invalidation happens only after the mutation has committed
    - A failing invalidation is logged and never fails the mutation
    - Paths are stored as given; the renderer decides how to refresh them

Design Decisions:
    - ViewRegistry is an in-process set of stale paths. The page renderer
      (outside this API) calls drain() at the start of a render pass and
      recomputes every path it gets back; nothing in the API reads it
    - ViewInvalidator wraps the registry so routes depend on one call, and tests
      substitute their own registry through get_view_invalidator
"""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class StaleViewStore(Protocol):
    def mark_stale(self, path: str) -> None: ...


class ViewRegistry:
    """Set of view paths whose cached render is out of date."""

    def __init__(self):
        self._stale: set[str] = set()

    def mark_stale(self, path: str) -> None:
        self._stale.add(path)

    def drain(self) -> set[str]:
        """Return every stale path and forget them."""
        stale, self._stale = self._stale, set()
        return stale


class ViewInvalidator:
    """Fire-and-forget front for a StaleViewStore."""

    def __init__(self, store: StaleViewStore):
        self._store = store

    def invalidate(self, *paths: str) -> None:
        for path in paths:
            try:
                self._store.mark_stale(path)
            except Exception as e:
                logger.warning(
                    f"View invalidation failed for {path}: {e}",
                    extra={"path": path}, exc_info=True,
                )


view_registry = ViewRegistry()


def get_view_invalidator() -> ViewInvalidator:
    """FastAPI dependency for view invalidation."""
    return ViewInvalidator(view_registry)
