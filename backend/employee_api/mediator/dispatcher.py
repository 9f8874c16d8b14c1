"""
Employee API — Dispatcher & Handler Registry
==============================================

What:  Routes a message to its single handler through the behavior chain.
How:   The registry maps each concrete message type to one handler factory.
       For every send() the dispatcher builds the handler from the request
       context and nests the behaviors around `handler.handle`:

           send(message)
             └─ LoggingBehavior.handle(message, next)
                  └─ ValidationBehavior.handle(message, next)
                       └─ UnitOfWorkBehavior.handle(message, next)
                            └─ handler.handle(message)

       Behaviors are listed outermost first. Each one may call `next_action`
       once or return its own Result without calling it (short-circuit).

Registration errors are exceptions, not Results: they mean the application
was wired wrongly. HandlerRegistry.verify() runs at startup so a missing
registration stops the process instead of failing the first request.
"""

import logging
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Protocol,
    Sequence,
    Type,
)

from employee_api.exceptions import HandlerRegistrationError
from employee_api.mediator.messages import Message
from employee_api.result import Result

logger = logging.getLogger(__name__)

NextAction = Callable[[], Awaitable[Result]]


class Handler(Protocol):
    async def handle(self, message: Any) -> Result: ...


HandlerFactory = Callable[[Any], Handler]


class PipelineBehavior:
    """Base class for behaviors; subclasses override `handle`."""

    async def handle(self, message: Message, next_action: NextAction) -> Result:
        return await next_action()


class HandlerRegistry:
    def __init__(self) -> None:
        self._factories: Dict[Type[Message], HandlerFactory] = {}

    def register(self, message_type: Type[Message], factory: HandlerFactory) -> None:
        """
        Binds `factory` as the only handler for `message_type`.

        Raises:
            HandlerRegistrationError: a handler is already registered
        """
        if message_type in self._factories:
            raise HandlerRegistrationError(message_type, "Handler already registered")
        self._factories[message_type] = factory

    def resolve(self, message_type: Type[Message]) -> HandlerFactory:
        try:
            return self._factories[message_type]
        except KeyError:
            raise HandlerRegistrationError(message_type, "No handler registered") from None

    def verify(self, message_types: Iterable[Type[Message]]) -> None:
        """Raises HandlerRegistrationError for the first type without a handler."""
        for message_type in message_types:
            self.resolve(message_type)
        logger.info("Handler registry verified: %d message types", len(self._factories))

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._factories

    def __len__(self) -> int:
        return len(self._factories)


class Dispatcher:
    """
    Per-request entry point used by the routes.

    Args:
        registry:  Message type → handler factory map (shared, immutable after startup)
        context:   Request-scoped collaborators passed to each handler factory
        behaviors: Pipeline behaviors, outermost first
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        context: Any = None,
        behaviors: Optional[Sequence[PipelineBehavior]] = None,
    ):
        self.registry = registry
        self.context = context
        self.behaviors: List[PipelineBehavior] = list(behaviors or [])

    async def send(self, message: Message) -> Result:
        handler = self.registry.resolve(type(message))(self.context)

        async def invoke_handler() -> Result:
            return await handler.handle(message)

        next_action: NextAction = invoke_handler
        for behavior in reversed(self.behaviors):
            next_action = _bind(behavior, message, next_action)
        return await next_action()


def _bind(behavior: PipelineBehavior, message: Message, next_action: NextAction) -> NextAction:
    async def run() -> Result:
        return await behavior.handle(message, next_action)

    return run
