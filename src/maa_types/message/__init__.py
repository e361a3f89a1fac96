"""Typed messages decoded from the MaaCore callback.

MaaCore reports every event as a numeric code and a JSON payload string.
``classify`` turns that pair into exactly one ``Message`` variant:

>>> message = classify(0, "{}")
>>> isinstance(message, InternalError)
True
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, assert_never

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from maa_types.message.codes import MessageCode
from maa_types.message.detail import (
    AllTasksCompletedDetail,
    AsyncCallInfoDetail,
    ConnectionInfoDetail,
    InitFailedDetail,
)
from maa_types.message.detail.extra_info import (
    SubTaskExtraInfoDetail,
    decode_subtask_extra_info,
)
from maa_types.message.detail.subtask import SubTaskDetail, decode_subtask_detail
from maa_types.message.detail.taskchain import TaskChainDetail, decode_taskchain_detail
from maa_types.message.errors import (
    MessageDecodeError,
    PayloadDecodeError,
    UnknownDiscriminant,
    UnknownMessageCode,
)
from maa_types.message.parsing import validate_json

logger = logging.getLogger(__name__)


class _Message(BaseModel):
    """Base for every decoded message variant."""

    model_config = ConfigDict(frozen=True, strict=True)


class InternalError(_Message):
    """Code 0: the engine hit an internal error; carries no payload."""

    kind: Literal["InternalError"] = "InternalError"


class InitFailed(_Message):
    """Code 1: initialization failed."""

    kind: Literal["InitFailed"] = "InitFailed"
    details: InitFailedDetail


class ConnectionInfo(_Message):
    """Code 2: connection lifecycle event."""

    kind: Literal["ConnectionInfo"] = "ConnectionInfo"
    details: ConnectionInfoDetail


class AllTasksCompleted(_Message):
    """Code 3: every queued task has finished."""

    kind: Literal["AllTasksCompleted"] = "AllTasksCompleted"
    details: AllTasksCompletedDetail


class AsyncCallInfo(_Message):
    """Code 4: an asynchronous call returned."""

    kind: Literal["AsyncCallInfo"] = "AsyncCallInfo"
    details: AsyncCallInfoDetail


class TaskChainInfo(_Message):
    """Codes 10000, 10001, 10002 and 10004: task chain status."""

    kind: Literal["TaskChainInfo"] = "TaskChainInfo"
    details: TaskChainDetail


class TaskChainExtraInfo(_Message):
    """Task chain extra info (code 10003).

    The engine does not fix a schema for this payload, so it is kept as the
    parsed JSON value. Subtask extra info (code 20003) is fully typed; the
    two are not symmetric.
    """

    kind: Literal["TaskChainExtraInfo"] = "TaskChainExtraInfo"
    details: Any


class SubTaskInfo(_Message):
    """Codes 20000, 20001, 20002 and 20004: subtask status."""

    kind: Literal["SubTaskInfo"] = "SubTaskInfo"
    details: SubTaskDetail


class SubTaskExtraInfo(_Message):
    """Code 20003: typed extra info for a running subtask."""

    kind: Literal["SubTaskExtraInfo"] = "SubTaskExtraInfo"
    details: SubTaskExtraInfoDetail


Message = Annotated[
    InternalError
    | InitFailed
    | ConnectionInfo
    | AllTasksCompleted
    | AsyncCallInfo
    | TaskChainInfo
    | TaskChainExtraInfo
    | SubTaskInfo
    | SubTaskExtraInfo,
    Field(discriminator="kind"),
]

_INIT_FAILED = TypeAdapter(InitFailedDetail)
_CONNECTION_INFO = TypeAdapter(ConnectionInfoDetail)
_ALL_TASKS_COMPLETED = TypeAdapter(AllTasksCompletedDetail)
_ASYNC_CALL_INFO = TypeAdapter(AsyncCallInfoDetail)
_ANY: TypeAdapter[Any] = TypeAdapter(Any)


def classify(code: int, payload: str) -> Message:
    """Decode one callback event into its ``Message`` variant.

    Raises ``UnknownMessageCode`` for codes outside the protocol,
    ``UnknownDiscriminant`` when a ``subtask`` or ``what`` value names no
    known case, and ``PayloadDecodeError`` when the payload is malformed.
    """
    try:
        msg = MessageCode(code)
    except ValueError:
        raise UnknownMessageCode(code) from None

    message: Message
    match msg:
        case MessageCode.INTERNAL_ERROR:
            message = InternalError()
        case MessageCode.INIT_FAILED:
            message = InitFailed(details=validate_json(_INIT_FAILED, payload, phase="payload"))
        case MessageCode.CONNECTION_INFO:
            message = ConnectionInfo(
                details=validate_json(_CONNECTION_INFO, payload, phase="payload")
            )
        case MessageCode.ALL_TASKS_COMPLETED:
            message = AllTasksCompleted(
                details=validate_json(_ALL_TASKS_COMPLETED, payload, phase="payload")
            )
        case MessageCode.ASYNC_CALL_INFO:
            message = AsyncCallInfo(
                details=validate_json(_ASYNC_CALL_INFO, payload, phase="payload")
            )
        case (
            MessageCode.TASK_CHAIN_ERROR
            | MessageCode.TASK_CHAIN_START
            | MessageCode.TASK_CHAIN_COMPLETED
            | MessageCode.TASK_CHAIN_STOPPED
        ):
            message = TaskChainInfo(details=decode_taskchain_detail(msg, payload))
        case MessageCode.TASK_CHAIN_EXTRA_INFO:
            message = TaskChainExtraInfo(details=validate_json(_ANY, payload, phase="payload"))
        case (
            MessageCode.SUB_TASK_ERROR
            | MessageCode.SUB_TASK_START
            | MessageCode.SUB_TASK_COMPLETED
            | MessageCode.SUB_TASK_STOPPED
        ):
            message = SubTaskInfo(details=decode_subtask_detail(msg, payload))
        case MessageCode.SUB_TASK_EXTRA_INFO:
            message = SubTaskExtraInfo(details=decode_subtask_extra_info(payload))
        case _:
            assert_never(msg)

    logger.debug("Decoded message code=%d kind=%s", code, message.kind)
    return message


__all__ = [
    "AllTasksCompleted",
    "AsyncCallInfo",
    "ConnectionInfo",
    "InitFailed",
    "InternalError",
    "Message",
    "MessageCode",
    "MessageDecodeError",
    "PayloadDecodeError",
    "SubTaskExtraInfo",
    "SubTaskInfo",
    "TaskChainExtraInfo",
    "TaskChainInfo",
    "UnknownDiscriminant",
    "UnknownMessageCode",
    "classify",
]
