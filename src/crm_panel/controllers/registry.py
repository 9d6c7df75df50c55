"""
Per-session list controllers.

Browser tabs can disappear without an unmount event, so the registry closes
controllers on its own: any left unused longer than ``idle_after``, and the
least recently used once more than ``max_size`` are held. Closing drops the
controller's cache subscription, after which the cache may evict its entries.
"""

import time
from collections import OrderedDict
from typing import Callable

from crm_panel import config
from crm_panel.controllers.list_controller import ListController
from crm_panel.lib import logs
from crm_panel.models.common import ResourceKind

LOG = logs.logger(__file__)

ControllerFactory = Callable[[ResourceKind], ListController]
_Key = tuple[str, ResourceKind]


class ControllerRegistry:
    """Controllers keyed by (session, resource), ordered by last use."""

    def __init__(
        self,
        factory: ControllerFactory,
        idle_after: float = config.CONTROLLER_IDLE_AFTER,
        max_size: int = config.CONTROLLER_LIMIT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            factory: Builds a new controller for a resource.
            idle_after: Seconds without use before a controller is closed.
            max_size: Most controllers held at once.
            clock: Monotonic time source.
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size!r}")
        self._factory = factory
        self._idle_after = idle_after
        self._max_size = max_size
        self._clock = clock
        self._entries: "OrderedDict[_Key, tuple[ListController, float]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: _Key) -> bool:
        return key in self._entries

    def get(self, session: str, resource: ResourceKind | str) -> ListController:
        """Return the session's controller for a resource, creating it when needed."""
        now = self._clock()
        self.sweep(now)
        key = (session, ResourceKind(resource))
        held = self._entries.pop(key, None)
        controller = held[0] if held else None
        if controller is None or controller.closed:
            LOG.debug("New controller - session:%s resource:%s", session, key[1].value)
            controller = self._factory(key[1])
        self._entries[key] = (controller, now)

        while len(self._entries) > self._max_size:
            (old_session, old_resource), (old, _) = self._entries.popitem(last=False)
            LOG.info(
                "Closing least recently used controller - session:%s resource:%s",
                old_session,
                old_resource.value,
            )
            old.close()
        return controller

    def release(self, session: str, resource: ResourceKind | str) -> None:
        """Close and forget a controller, e.g. when its page unmounts."""
        held = self._entries.pop((session, ResourceKind(resource)), None)
        if held is not None:
            held[0].close()

    def sweep(self, now: float | None = None) -> int:
        """
        Close controllers unused for longer than idle_after.

        Returns:
            Number of controllers closed.
        """
        now = self._clock() if now is None else now
        idle = []
        for key, (_, used) in self._entries.items():
            if now - used <= self._idle_after:
                break
            idle.append(key)
        for key in idle:
            controller, _ = self._entries.pop(key)
            controller.close()
        if idle:
            LOG.info("Closed %s idle controllers", len(idle))
        return len(idle)

