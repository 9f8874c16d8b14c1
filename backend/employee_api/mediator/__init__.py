"""
Employee API — In-Process Mediator
====================================

    messages.py    Command / Query base types
    dispatcher.py  HandlerRegistry and Dispatcher
    behaviors.py   logging, validation and unit-of-work pipeline steps
"""

from employee_api.mediator.behaviors import (
    LoggingBehavior,
    UnitOfWorkBehavior,
    ValidationBehavior,
    Validator,
)
from employee_api.mediator.dispatcher import (
    Dispatcher,
    Handler,
    HandlerRegistry,
    PipelineBehavior,
)
from employee_api.mediator.messages import Command, Message, Query

__all__ = [
    "Command",
    "Dispatcher",
    "Handler",
    "HandlerRegistry",
    "LoggingBehavior",
    "Message",
    "PipelineBehavior",
    "Query",
    "UnitOfWorkBehavior",
    "ValidationBehavior",
    "Validator",
]
