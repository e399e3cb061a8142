"""
Recovery Event Bus

In-process observer the host application subscribes to, e.g. for analytics.
Handlers run concurrently after the recovery step has been persisted. A
failing handler is logged and never breaks the request.
"""

import asyncio
import inspect
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List, Union

from src.domain.entities import RecoveryEvent, RecoveryEventName, User

logger = logging.getLogger(__name__)

EventHandler = Callable[[RecoveryEvent], Union[Awaitable[None], None]]


class RecoveryEventBus:
    def __init__(self):
        self._handlers: Dict[RecoveryEventName, List[EventHandler]] = defaultdict(list)

    def subscribe(self, name: Union[RecoveryEventName, str], handler: EventHandler) -> None:
        """Register a sync or async handler for an event name such as 'forgot::sent'"""
        self._handlers[RecoveryEventName(name)].append(handler)

    def unsubscribe(self, name: Union[RecoveryEventName, str], handler: EventHandler) -> None:
        handlers = self._handlers.get(RecoveryEventName(name), [])
        if handler in handlers:
            handlers.remove(handler)

    def on(self, name: Union[RecoveryEventName, str]):
        """Decorator form of subscribe"""

        def decorator(handler: EventHandler) -> EventHandler:
            self.subscribe(name, handler)
            return handler

        return decorator

    async def publish(self, name: RecoveryEventName, user: User, context: Any = None) -> None:
        handlers = list(self._handlers.get(name, []))
        if not handlers:
            return

        event = RecoveryEvent(name=name, user=user, context=context)
        logger.debug(f"Publishing {name.value} to {len(handlers)} handler(s)")

        results = await asyncio.gather(
            *(self._call(handler, event) for handler in handlers),
            return_exceptions=True,
        )

        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.warning(
                    f"Event handler {getattr(handler, '__name__', repr(handler))} "
                    f"failed for {name.value}: {result!r}"
                )

    @staticmethod
    async def _call(handler: EventHandler, event: RecoveryEvent) -> None:
        outcome = handler(event)
        if inspect.isawaitable(outcome):
            await outcome
