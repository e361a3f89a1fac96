"""Task chain identity, status and the status-message decoder (codes 10000-10004)."""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

from maa_types.message.codes import MessageCode
from maa_types.message.errors import UnknownMessageCode
from maa_types.message.parsing import load_object, validate

logger = logging.getLogger(__name__)


class TaskChain(StrEnum):
    """Top-level task chains MaaCore can run."""

    START_UP = "StartUp"
    CLOSE_DOWN = "CloseDown"
    FIGHT = "Fight"
    MALL = "Mall"
    RECRUIT = "Recruit"
    INFRAST = "Infrast"
    AWARD = "Award"
    ROGUELIKE = "Roguelike"
    COPILOT = "Copilot"
    SSS_COPILOT = "SSSCopilot"
    DEPOT = "Depot"
    OPER_BOX = "OperBox"
    RECLAMATION_ALGORITHM = "ReclamationAlgorithm"
    CUSTOM = "Custom"
    SINGLE_STEP = "SingleStep"
    VIDEO_RECOGNITION = "VideoRecognition"
    DEBUG = "Debug"


class TaskChainStatus(StrEnum):
    ERROR = "TaskChainError"
    START = "TaskChainStart"
    COMPLETED = "TaskChainCompleted"
    STOPPED = "TaskChainStopped"

    @classmethod
    def from_code(cls, code: int) -> TaskChainStatus:
        """Map a task chain status code to its status.

        ``TASK_CHAIN_EXTRA_INFO`` carries no status and is rejected like any
        other code outside the table.
        """
        try:
            return _STATUS_BY_CODE[code]
        except KeyError:
            raise UnknownMessageCode(code) from None


_STATUS_BY_CODE: dict[int, TaskChainStatus] = {
    MessageCode.TASK_CHAIN_ERROR: TaskChainStatus.ERROR,
    MessageCode.TASK_CHAIN_START: TaskChainStatus.START,
    MessageCode.TASK_CHAIN_COMPLETED: TaskChainStatus.COMPLETED,
    MessageCode.TASK_CHAIN_STOPPED: TaskChainStatus.STOPPED,
}


class TaskChainDetail(BaseModel):
    """Status report for one task chain."""

    model_config = ConfigDict(frozen=True, strict=True)

    # The engine names this field ``taskchain``; older consumers used ``chain``.
    taskchain: TaskChain = Field(validation_alias=AliasChoices("taskchain", "chain"))
    uuid: str
    status: TaskChainStatus
    taskid: int


_DETAIL = TypeAdapter(TaskChainDetail)


def decode_taskchain_detail(code: int, payload: str) -> TaskChainDetail:
    """Decode a task chain status payload; the status comes from ``code`` alone."""
    status = TaskChainStatus.from_code(code)
    data = load_object(payload, phase="payload")
    data["status"] = status
    detail = validate(_DETAIL, data, phase="payload")
    logger.debug(
        "Task chain %s — taskid=%s status=%s", detail.taskchain, detail.taskid, status
    )
    return detail
