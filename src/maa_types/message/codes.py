"""Numeric message codes emitted by the MaaCore callback."""

from __future__ import annotations

from enum import IntEnum


class MessageCode(IntEnum):
    """Every code the callback protocol defines."""

    INTERNAL_ERROR = 0
    INIT_FAILED = 1
    CONNECTION_INFO = 2
    ALL_TASKS_COMPLETED = 3
    ASYNC_CALL_INFO = 4

    TASK_CHAIN_ERROR = 10000
    TASK_CHAIN_START = 10001
    TASK_CHAIN_COMPLETED = 10002
    TASK_CHAIN_EXTRA_INFO = 10003
    TASK_CHAIN_STOPPED = 10004

    SUB_TASK_ERROR = 20000
    SUB_TASK_START = 20001
    SUB_TASK_COMPLETED = 20002
    SUB_TASK_EXTRA_INFO = 20003
    SUB_TASK_STOPPED = 20004
