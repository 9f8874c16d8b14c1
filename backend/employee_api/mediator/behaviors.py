"""
Employee API — Pipeline Behaviors
===================================

Cross-cutting steps wrapped around every handler by the Dispatcher.

    LoggingBehavior      start/finish at DEBUG, failures at INFO,
                         exceptions at WARNING (then re-raised)
    ValidationBehavior   field rules; short-circuits with a Validation error
    UnitOfWorkBehavior   commits successful commands, rolls back failed ones
"""

import logging
import time
from typing import Dict, Mapping, Optional, Protocol, Sequence, Type

from employee_api.data.unit_of_work import UnitOfWork
from employee_api.mediator.dispatcher import NextAction, PipelineBehavior
from employee_api.mediator.messages import Command, Message
from employee_api.result import ErrorResult, Result

logger = logging.getLogger(__name__)


class Validator(Protocol):
    def validate(self, message: Message) -> Dict[str, str]:
        """Returns field → message for every broken rule (empty when valid)."""
        ...


class LoggingBehavior(PipelineBehavior):
    async def handle(self, message: Message, next_action: NextAction) -> Result:
        name = type(message).__name__
        logger.debug("Handling request: %s", name)
        start = time.perf_counter()

        try:
            result = await next_action()
        except Exception as e:
            logger.warning("Request %s raised %s: %s", name, type(e).__name__, str(e))
            raise
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.debug("Finished handling request: %s (%.1fms)", name, duration_ms)

        if result.is_failure:
            logger.info(
                "Request %s failed: %s (%s)",
                name,
                result.error.description,
                result.error.definition.value,
            )
        return result


class ValidationBehavior(PipelineBehavior):
    """
    Runs every validator registered for the concrete message type.

    Errors from all validators are merged; the first message for a field
    wins. Messages without validators pass straight through.
    """

    def __init__(self, validators: Optional[Mapping[Type[Message], Sequence[Validator]]] = None):
        self.validators = validators or {}

    async def handle(self, message: Message, next_action: NextAction) -> Result:
        errors: Dict[str, str] = {}
        for validator in self.validators.get(type(message), ()):
            for field, error in validator.validate(message).items():
                errors.setdefault(field, error)

        if errors:
            return Result.failure(ErrorResult.validation(type(message).__name__, errors))
        return await next_action()


class UnitOfWorkBehavior(PipelineBehavior):
    """Commit point of the request; queries pass through untouched."""

    def __init__(self, unit_of_work: UnitOfWork):
        self.unit_of_work = unit_of_work

    async def handle(self, message: Message, next_action: NextAction) -> Result:
        if not isinstance(message, Command):
            return await next_action()

        result = await next_action()
        if result.is_failure:
            await self.unit_of_work.rollback()
        elif self.unit_of_work.has_pending_changes():
            await self.unit_of_work.save_changes()
        return result
