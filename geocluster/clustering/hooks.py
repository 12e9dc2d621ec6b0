"""
Lifecycle hooks for clustering passes.

Two ordered callback lists:
- CLUSTER_CREATED: called with each cluster right after it is built
- CLUSTERS_READY: called once per pass with the complete cluster list

A failing callback is logged and skipped. It never aborts a pass or stops
the callbacks registered after it.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import HookError

logger = logging.getLogger(__name__)

Hook = Callable[[Any], Any]


class HookKind(str, Enum):
    """Points in a pass where callbacks run."""
    CLUSTER_CREATED = "cluster_created"
    CLUSTERS_READY = "clusters_ready"


class HookRegistry:
    """Ordered, per-kind callback lists with isolated invocation."""

    def __init__(self):
        self._hooks: Dict[HookKind, List[Hook]] = {kind: [] for kind in HookKind}

    def add(self, kind: HookKind, callback: Hook) -> None:
        self._hooks[HookKind(kind)].append(callback)

    def remove(self, kind: HookKind, callback: Hook) -> None:
        """Remove the first registration of ``callback``; missing is a no-op."""
        hooks = self._hooks[HookKind(kind)]
        for index, registered in enumerate(hooks):
            if registered is callback:
                del hooks[index]
                return

    def callbacks(self, kind: HookKind) -> Tuple[Hook, ...]:
        return tuple(self._hooks[HookKind(kind)])

    def clear(self, kind: Optional[HookKind] = None) -> None:
        kinds = list(HookKind) if kind is None else [HookKind(kind)]
        for k in kinds:
            self._hooks[k] = []

    def fire(self, kind: HookKind, payload: Any) -> int:
        """
        Invoke every callback of ``kind`` with ``payload``.

        Returns:
            Number of callbacks that raised
        """
        failures = 0
        # Snapshot so callbacks may add/remove hooks while we iterate
        for callback in self.callbacks(kind):
            if not _invoke_and_log(HookKind(kind), callback, payload):
                failures += 1
        return failures


def _invoke_and_log(kind: HookKind, callback: Hook, payload: Any) -> bool:
    try:
        callback(payload)
    except Exception as exc:
        logger.exception(str(HookError(kind, callback, exc)))
        return False
    return True
