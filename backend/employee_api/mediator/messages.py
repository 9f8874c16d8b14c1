"""
Employee API — Message Base Types
===================================

Every message sent through the Dispatcher derives from one of these.

    Command   changes state; wrapped by the unit-of-work behavior
    Query     reads state; never commits

Messages are frozen dataclasses: a message is a value built by the route
and never modified by the pipeline.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    pass


@dataclass(frozen=True)
class Command(Message):
    pass


@dataclass(frozen=True)
class Query(Message):
    pass
