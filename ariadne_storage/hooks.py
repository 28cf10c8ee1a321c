"""Observers for storage adapter mutations and CMS failures.

The adapter emits one event per successful mutation and one per swallowed
``CmsError``. Handlers receive the event name and the keyword payload, e.g.
``("storage:write", {"path": "a/b.txt", "size": 2})``.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

WRITE = "storage:write"
COPY = "storage:copy"
RENAME = "storage:rename"
DELETE = "storage:delete"
CREATE_DIR = "storage:create_dir"
CMS_ERROR = "storage:cms_error"

ALL_EVENTS = "*"

HookHandler = Callable[[str, Dict[str, object]], None]


class HookBus:
    """Route adapter events to handlers registered by event name or for every event."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[HookHandler]] = {}

    def subscribe(self, event: str, handler: HookHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def subscribe_all(self, handler: HookHandler) -> None:
        self.subscribe(ALL_EVENTS, handler)

    def emit(self, event: str, **payload: object) -> None:
        targets = [*self._handlers.get(event, ()), *self._handlers.get(ALL_EVENTS, ())]
        for handler in targets:
            try:
                handler(event, payload)
            except Exception:
                # A broken observer must not turn a finished mutation into a failure
                logger.warning("Hook handler %r failed on %s", handler, event, exc_info=True)


def _log_mutation(event: str, payload: Dict[str, object]) -> None:
    logger.debug("%s %s", event, ", ".join(f"{key}={value!r}" for key, value in payload.items()))


hooks = HookBus()
hooks.subscribe_all(_log_mutation)
