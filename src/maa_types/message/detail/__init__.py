"""Payload records for the connection-level messages (codes 1-4)."""

from __future__ import annotations

from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from maa_types.message.detail.taskchain import TaskChain


class InitFailedDetail(BaseModel):
    """Reported when MaaCore fails to initialize."""

    model_config = ConfigDict(frozen=True, strict=True)

    what: str
    why: str
    details: str


class ConnectionInfoWhat(StrEnum):
    """Connection lifecycle markers."""

    CONNECT_FAILED = "ConnectFailed"
    CONNECTED = "Connected"
    UUID_GOT = "UuidGot"
    UNSUPPORTED_RESOLUTION = "UnsupportedResolution"
    RESOLUTION_ERROR = "ResolutionError"
    RECONNECTING = "Reconnecting"
    RECONNECTED = "Reconnected"
    DISCONNECT = "Disconnect"
    SCREENCAP_FAILED = "ScreencapFailed"
    TOUCH_MODE_NOT_AVAILABLE = "TouchModeNotAvailable"


class ConnectionInfoDetails(BaseModel):
    """Device connection parameters attached to a connection event."""

    model_config = ConfigDict(frozen=True, strict=True)

    adb: str
    address: str
    config: str


class ConnectionInfoDetail(BaseModel):
    """A connection lifecycle event for the controlled device."""

    model_config = ConfigDict(frozen=True, strict=True)

    what: ConnectionInfoWhat
    why: str
    uuid: str
    details: ConnectionInfoDetails


class AllTasksCompletedDetail(BaseModel):
    """Sent once every queued task of a chain has finished."""

    model_config = ConfigDict(frozen=True, strict=True)

    taskchain: TaskChain = Field(validation_alias=AliasChoices("taskchain", "chain"))
    uuid: str
    finished_tasks: list[int] = Field(
        validation_alias=AliasChoices("finished_tasks", "tasks")
    )


class AsyncCallInfoDetails(BaseModel):
    """Outcome of an asynchronous call."""

    model_config = ConfigDict(frozen=True, strict=True)

    ret: bool
    cost: int


class AsyncCallInfoDetail(BaseModel):
    """Completion report for an asynchronous call such as connect or click."""

    model_config = ConfigDict(frozen=True, strict=True)

    uuid: str
    what: str
    async_call_id: int
    details: AsyncCallInfoDetails


__all__ = [
    "AllTasksCompletedDetail",
    "AsyncCallInfoDetail",
    "AsyncCallInfoDetails",
    "ConnectionInfoDetail",
    "ConnectionInfoDetails",
    "ConnectionInfoWhat",
    "InitFailedDetail",
]
