"""Typed MaaCore callback messages and task parameters."""

from maa_types.dispatch import DispatchStats, MessageDispatcher
from maa_types.message import Message, MessageCode, MessageDecodeError, classify
from maa_types.task import AsstTaskParam, TaskType

__all__ = [
    "AsstTaskParam",
    "DispatchStats",
    "Message",
    "MessageCode",
    "MessageDecodeError",
    "MessageDispatcher",
    "TaskType",
    "classify",
]
