"""Subtask status messages (codes 20000-20004, except extra info).

The payload carries a ``subtask`` discriminant naming the kind of subtask and
a ``details`` object whose shape depends on it.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, assert_never

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from maa_types.message.codes import MessageCode
from maa_types.message.detail.taskchain import TaskChain
from maa_types.message.errors import PayloadDecodeError, UnknownDiscriminant, UnknownMessageCode
from maa_types.message.parsing import load_object, validate

logger = logging.getLogger(__name__)


class Task(StrEnum):
    """Named pipeline tasks reported through ``ProcessTask`` subtasks."""

    START_BUTTON_2 = "StartButton2"
    MEDICINE_CONFIRM = "MedicineConfirm"
    STONE_CONFIRM = "StoneConfirm"
    RECRUIT_REFRESH_CONFIRM = "RecruitRefreshConfirm"
    RECRUIT_CONFIRM = "RecruitConfirm"
    RECRUIT_NOW_CONFIRM = "RecruitNowConfirm"
    REPORT_TO_PENGUIN_STATS = "ReportToPenguinStats"
    REPORT_TO_YITULIU = "ReportToYituliu"
    INFRAST_DORM_DOUBLE_CONFIRM_BUTTON = "InfrastDormDoubleConfirmButton"
    START_EXPLORE = "StartExplore"
    STAGE_TRADER_INVEST_CONFIRM = "StageTraderInvestConfirm"
    STAGE_TRADER_INVEST_SYSTEM_FULL = "StageTraderInvestSystemFull"
    EXIT_THEN_ABANDON = "ExitThenAbandon"
    MISSION_COMPLETED_FLAG = "MissionCompletedFlag"
    MISSION_FAILED_FLAG = "MissionFailedFlag"
    STAGE_TRADER_ENTER = "StageTraderEnter"
    STAGE_SAFE_HOUSE_ENTER = "StageSafeHouseEnter"
    STAGE_ENCOUNTER_ENTER = "StageEncounterEnter"
    STAGE_CAMBAT_DPS_ENTER = "StageCambatDpsEnter"
    STAGE_EMERGENCY_DPS = "StageEmergencyDps"
    STAGE_DREADFUL_FOE = "StageDreadfulFoe"
    START_GAME_TASK = "StartGameTask"


class SubTaskStatus(StrEnum):
    ERROR = "SubTaskError"
    START = "SubTaskStart"
    COMPLETED = "SubTaskCompleted"
    STOPPED = "SubTaskStopped"

    @classmethod
    def from_code(cls, code: int) -> SubTaskStatus:
        """Map a subtask status code to its status; extra info has none."""
        try:
            return _STATUS_BY_CODE[code]
        except KeyError:
            raise UnknownMessageCode(code) from None


_STATUS_BY_CODE: dict[int, SubTaskStatus] = {
    MessageCode.SUB_TASK_ERROR: SubTaskStatus.ERROR,
    MessageCode.SUB_TASK_START: SubTaskStatus.START,
    MessageCode.SUB_TASK_COMPLETED: SubTaskStatus.COMPLETED,
    MessageCode.SUB_TASK_STOPPED: SubTaskStatus.STOPPED,
}


class SubTaskKind(StrEnum):
    """Values of the ``subtask`` discriminant."""

    PROCESS_TASK = "ProcessTask"


class ProcessTaskDetails(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    task: Task
    action: int
    exec_times: int
    max_times: int
    algorithm: int


class _SubTaskEnvelope(BaseModel):
    """Optional identity fields the engine sends alongside every subtask."""

    model_config = ConfigDict(strict=True)

    taskchain: TaskChain | None = None
    class_name: str | None = Field(default=None, alias="class")
    uuid: str | None = None


class SubTaskDetail(BaseModel):
    """Status report for one subtask, with details selected by ``subtask``."""

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    status: SubTaskStatus
    subtask: SubTaskKind
    details: ProcessTaskDetails
    taskchain: TaskChain | None = None
    class_name: str | None = Field(default=None, alias="class")
    uuid: str | None = None


_ENVELOPE = TypeAdapter(_SubTaskEnvelope)
_PROCESS_TASK = TypeAdapter(ProcessTaskDetails)


def _subtask_kind(data: dict[str, Any]) -> SubTaskKind:
    value = data.get("subtask")
    if not isinstance(value, str):
        cause = TypeError(f"expected a string, got {type(value).__name__}")
        raise PayloadDecodeError("payload", "subtask", cause)
    try:
        return SubTaskKind(value)
    except ValueError:
        raise UnknownDiscriminant("subtask", value) from None


def decode_subtask_detail(code: int, payload: str) -> SubTaskDetail:
    """Decode a subtask status payload; the status comes from ``code`` alone."""
    status = SubTaskStatus.from_code(code)
    data = load_object(payload, phase="payload")
    envelope = validate(_ENVELOPE, data, phase="envelope")
    kind = _subtask_kind(data)

    match kind:
        case SubTaskKind.PROCESS_TASK:
            details = validate(
                _PROCESS_TASK, data.get("details"), phase="details", prefix=("details",)
            )
        case _:
            assert_never(kind)

    logger.debug("Subtask %s — status=%s", kind, status)
    return SubTaskDetail(
        status=status,
        subtask=kind,
        details=details,
        taskchain=envelope.taskchain,
        class_name=envelope.class_name,
        uuid=envelope.uuid,
    )
