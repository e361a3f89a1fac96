"""Subtask extra info (code 20003).

Decoding happens in two phases. The envelope fields (``taskchain``,
``class``, ``uuid``, ``what``) are read first without knowing the leaf
shape. Then only ``{"what": ..., "details": ...}`` is validated against the
closed union of leaf cases keyed by ``what``, so the leaf models never see
the envelope fields.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

from maa_types.message.detail.taskchain import TaskChain
from maa_types.message.errors import UnknownDiscriminant
from maa_types.message.parsing import load_object, validate

logger = logging.getLogger(__name__)


class ExtraInfoKind(StrEnum):
    """Values of the ``what`` discriminant."""

    STAGE_DROPS = "StageDrops"
    RECRUIT_TAGS_DETECTED = "RecruitTagsDetected"
    RECRUIT_SPECIAL_TAG = "RecruitSpecialTag"
    RECRUIT_RESULT = "RecruitResult"
    RECRUIT_TAGS_REFRESHED = "RecruitTagsRefreshed"
    RECRUIT_TAGS_SELECTED = "RecruitTagsSelected"
    RECRUIT_SLOT_COMPLETED = "RecruitSlotCompleted"
    RECRUIT_ERROR = "RecruitError"
    ENTER_FACILITY = "EnterFacility"
    NOT_ENOUGH_STAFF = "NotEnoughStaff"
    PRODUCT_OF_FACILITY = "ProductOfFacility"
    STAGE_INFO = "StageInfo"
    STAGE_INFO_ERROR = "StageInfoError"
    PENGUIN_ID = "PenguinId"
    DEPOT = "Depot"
    OPER_BOX = "OperBox"
    UNSUPPORTED_LEVEL = "UnsupportedLevel"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)


# Leaf records


class StageDropsStage(_Record):
    stage_code: str = Field(alias="stageCode")
    stage_id: str = Field(alias="stageId")


class StageDropsStat(_Record):
    item_id: str = Field(alias="itemId")
    item_name: str = Field(alias="itemName")
    quantity: int
    add_quantity: int = Field(alias="addQuantity")


class StageDropsDetail(_Record):
    stage: StageDropsStage
    stars: int
    stats: list[StageDropsStat]


class RecruitTagsDetectedDetail(_Record):
    tags: list[str]


RecruitTagsSelectedDetail = RecruitTagsDetectedDetail


class RecruitSpecialTagDetail(_Record):
    tag: str


class RecruitResultOperator(_Record):
    name: str
    level: int


class RecruitResultItem(_Record):
    tags: list[str]
    level: int
    operators: list[RecruitResultOperator] = Field(alias="opers")


class RecruitResultDetail(_Record):
    tags: list[str]
    level: int
    result: list[RecruitResultItem]


class RecruitTagsRefreshedDetail(_Record):
    count: int
    refresh_limit: int


class EnterFacilityDetail(_Record):
    facility: str
    index: int


NotEnoughStaffDetail = EnterFacilityDetail


class ProductOfFacilityDetail(_Record):
    product: str
    facility: str
    index: int


class StageInfoDetail(_Record):
    name: str


class PenguinIdDetail(_Record):
    id: str


class DepotItem(_Record):
    id: str
    have: int
    name: str


class DepotArkPlannerObject(_Record):
    items: list[DepotItem]
    object_type: str = Field(alias="@type")


class DepotArkPlanner(_Record):
    object: DepotArkPlannerObject
    data: str


class DepotLolicon(_Record):
    object: dict[str, int]
    data: str


class DepotDetail(_Record):
    done: bool
    arkplanner: DepotArkPlanner
    lolicon: DepotLolicon


class OperBoxAllItem(_Record):
    id: str
    name: str
    own: bool
    rarity: int


class OperBoxOwnItem(_Record):
    id: str
    name: str
    own: bool
    elite: int
    level: int
    potential: int
    rarity: int


class OperBoxDetail(_Record):
    done: bool
    all_oper: list[OperBoxAllItem]
    own_opers: list[OperBoxOwnItem] = Field(
        validation_alias=AliasChoices("own_opers", "own_opes")
    )


# Leaf cases, one per ``what`` value. Marker cases carry no details and
# ignore any that are sent.


class StageDrops(_Record):
    what: Literal["StageDrops"] = "StageDrops"
    details: StageDropsDetail


class RecruitTagsDetected(_Record):
    what: Literal["RecruitTagsDetected"] = "RecruitTagsDetected"
    details: RecruitTagsDetectedDetail


class RecruitSpecialTag(_Record):
    what: Literal["RecruitSpecialTag"] = "RecruitSpecialTag"
    details: RecruitSpecialTagDetail


class RecruitResult(_Record):
    what: Literal["RecruitResult"] = "RecruitResult"
    details: RecruitResultDetail


class RecruitTagsRefreshed(_Record):
    what: Literal["RecruitTagsRefreshed"] = "RecruitTagsRefreshed"
    details: RecruitTagsRefreshedDetail


class RecruitTagsSelected(_Record):
    what: Literal["RecruitTagsSelected"] = "RecruitTagsSelected"
    details: RecruitTagsSelectedDetail


class RecruitSlotCompleted(_Record):
    what: Literal["RecruitSlotCompleted"] = "RecruitSlotCompleted"


class RecruitError(_Record):
    what: Literal["RecruitError"] = "RecruitError"


class EnterFacility(_Record):
    what: Literal["EnterFacility"] = "EnterFacility"
    details: EnterFacilityDetail


class NotEnoughStaff(_Record):
    what: Literal["NotEnoughStaff"] = "NotEnoughStaff"
    details: NotEnoughStaffDetail


class ProductOfFacility(_Record):
    what: Literal["ProductOfFacility"] = "ProductOfFacility"
    details: ProductOfFacilityDetail


class StageInfo(_Record):
    what: Literal["StageInfo"] = "StageInfo"
    details: StageInfoDetail


class StageInfoError(_Record):
    what: Literal["StageInfoError"] = "StageInfoError"


class PenguinId(_Record):
    what: Literal["PenguinId"] = "PenguinId"
    details: PenguinIdDetail


class Depot(_Record):
    what: Literal["Depot"] = "Depot"
    details: DepotDetail


class OperBox(_Record):
    what: Literal["OperBox"] = "OperBox"
    details: OperBoxDetail


class UnsupportedLevel(_Record):
    what: Literal["UnsupportedLevel"] = "UnsupportedLevel"


SubTaskExtraInfoDetails = Annotated[
    StageDrops
    | RecruitTagsDetected
    | RecruitSpecialTag
    | RecruitResult
    | RecruitTagsRefreshed
    | RecruitTagsSelected
    | RecruitSlotCompleted
    | RecruitError
    | EnterFacility
    | NotEnoughStaff
    | ProductOfFacility
    | StageInfo
    | StageInfoError
    | PenguinId
    | Depot
    | OperBox
    | UnsupportedLevel,
    Field(discriminator="what"),
]


class _ExtraInfoEnvelope(BaseModel):
    model_config = ConfigDict(strict=True)

    taskchain: TaskChain
    class_name: str = Field(alias="class")
    uuid: str
    what: str


class SubTaskExtraInfoDetail(_Record):
    """Extra info attached to a running subtask."""

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    taskchain: TaskChain
    class_name: str = Field(alias="class")
    uuid: str
    details: SubTaskExtraInfoDetails

    @property
    def what(self) -> ExtraInfoKind:
        return ExtraInfoKind(self.details.what)


_ENVELOPE = TypeAdapter(_ExtraInfoEnvelope)
_DETAILS: TypeAdapter[Any] = TypeAdapter(SubTaskExtraInfoDetails)


def decode_subtask_extra_info(payload: str) -> SubTaskExtraInfoDetail:
    """Decode a subtask extra info payload into its envelope and leaf case."""
    data = load_object(payload, phase="envelope")
    envelope = validate(_ENVELOPE, data, phase="envelope")

    try:
        kind = ExtraInfoKind(envelope.what)
    except ValueError:
        raise UnknownDiscriminant("what", envelope.what) from None

    narrowed: dict[str, Any] = {"what": kind.value}
    if "details" in data:
        narrowed["details"] = data["details"]
    # Leaf error locations start with the union tag.
    details = validate(_DETAILS, narrowed, phase="details", skip=1)

    logger.debug("Subtask extra info %s — class=%s", kind, envelope.class_name)
    return SubTaskExtraInfoDetail(
        taskchain=envelope.taskchain,
        class_name=envelope.class_name,
        uuid=envelope.uuid,
        details=details,
    )
