"""Parameter records for tasks appended to MaaCore.

Every field has the engine's default, so an empty constructor produces a
usable task. ``AsstTaskParam`` pairs a record with its task type name and
renders the JSON the engine expects.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

_INT_MAX = 2**31 - 1


class ClientType(StrEnum):
    OFFICIAL = "Official"
    BILIBILI = "Bilibili"
    TXWY = "txwy"
    YOSTAR_EN = "YoStarEN"
    YOSTAR_JP = "YoStarJP"
    YOSTAR_KR = "YoStarKR"


class Server(StrEnum):
    CN = "CN"
    US = "US"
    JP = "JP"
    KR = "KR"


class InfrastFacility(StrEnum):
    MFG = "Mfg"
    TRADE = "Trade"
    POWER = "Power"
    CONTROL = "Control"
    RECEPTION = "Reception"
    OFFICE = "Office"
    DORM = "Dorm"


class DronesUsage(StrEnum):
    NOT_USE = "_NotUse"
    MONEY = "Money"
    SYNTHETIC_JADE = "SyntheticJade"
    COMBAT_RECORD = "CombatRecord"
    PURE_GOLD = "PureGold"
    ORIGIN_STONE = "OriginStone"
    CHIP = "Chip"


class TaskParams(BaseModel):
    """Base for every task parameter record."""

    model_config = ConfigDict(populate_by_name=True)

    enable: bool = True

    def to_json(self) -> str:
        """Serialize with the engine's field names."""
        return self.model_dump_json(by_alias=True)


class StartUpParams(TaskParams):
    client_type: ClientType | None = None
    start_game_enabled: bool = False


class CloseDownParams(TaskParams):
    pass


AwardParams = CloseDownParams


class FightParams(TaskParams):
    stage: str | None = None
    medicine: int = 0
    expiring_medicine: int = 0
    stone: int = 0
    times: int = _INT_MAX
    drops: dict[str, int] = Field(default_factory=dict)
    report_to_penguin: bool = False
    penguin_id: str | None = None
    server: Server | None = None
    client_type: ClientType | None = None
    # Sent verbatim; the engine does not use snake_case for this key.
    dr_grandet: bool = Field(default=False, alias="DrGrandet")


def _default_recruitment_time() -> dict[str, int]:
    return {str(level): 540 for level in range(3, 7)}


class RecruitParams(TaskParams):
    refresh: bool = False
    select: list[int] = Field(default_factory=list)
    confirm: list[int] = Field(default_factory=list)
    times: int = 0
    set_time: bool = True
    expedite: bool = False
    expedite_times: int = _INT_MAX
    skip_robot: bool = True
    recruitment_time: dict[str, int] = Field(default_factory=_default_recruitment_time)
    report_to_penguin: bool = False
    penguin_id: str | None = None
    report_to_yituliu: bool = False
    yituliu_id: str | None = None
    server: Server | None = None


class InfrastParams(TaskParams):
    mode: int = 0
    facility: list[InfrastFacility] = Field(default_factory=lambda: list(InfrastFacility))
    drones: DronesUsage = DronesUsage.NOT_USE
    threshold: float = 0.3
    replenish: bool = False
    dorm_notstationed_enabled: bool = False
    dorm_trust_enabled: bool = False
    filename: str | None = None
    plan_index: int | None = None


class MallParams(TaskParams):
    shopping: bool = False
    buy_first: list[str] | None = None
    blacklist: list[str] | None = None
    force_shopping_if_credit_full: bool = True


class RoguelikeParams(TaskParams):
    theme: str | None = None
    mode: int = 0
    starts_count: int = _INT_MAX
    investment_enabled: bool = True
    investments_count: int = _INT_MAX
    stop_when_investment_full: bool = False
    squad: str | None = None
    roles: str | None = None
    core_char: str | None = None
    use_support: bool = False
    use_nonfriend_support: bool = False
    refresh_trader_with_dice: bool = False


class TaskType(StrEnum):
    START_UP = "StartUp"
    CLOSE_DOWN = "CloseDown"
    FIGHT = "Fight"
    RECRUIT = "Recruit"
    INFRAST = "Infrast"
    MALL = "Mall"
    AWARD = "Award"
    ROGUELIKE = "Roguelike"


PARAMS_BY_TYPE: dict[TaskType, type[TaskParams]] = {
    TaskType.START_UP: StartUpParams,
    TaskType.CLOSE_DOWN: CloseDownParams,
    TaskType.FIGHT: FightParams,
    TaskType.RECRUIT: RecruitParams,
    TaskType.INFRAST: InfrastParams,
    TaskType.MALL: MallParams,
    TaskType.AWARD: AwardParams,
    TaskType.ROGUELIKE: RoguelikeParams,
}


class AsstTaskParam(BaseModel):
    """A task type paired with parameters of the matching record type."""

    model_config = ConfigDict(frozen=True)

    task_type: TaskType
    params: TaskParams

    @model_validator(mode="after")
    def check_params_type(self) -> AsstTaskParam:
        expected = PARAMS_BY_TYPE[self.task_type]
        if type(self.params) is not expected:
            msg = (
                f"{self.task_type} expects {expected.__name__}, "
                f"got {type(self.params).__name__}"
            )
            raise ValueError(msg)
        return self

    @classmethod
    def of(cls, task_type: TaskType | str, params: TaskParams | None = None) -> AsstTaskParam:
        """Build a task, defaulting every parameter when ``params`` is omitted."""
        task_type = TaskType(task_type)
        if params is None:
            params = PARAMS_BY_TYPE[task_type]()
        return cls(task_type=task_type, params=params)

    @classmethod
    def start_up(cls, params: StartUpParams | None = None) -> AsstTaskParam:
        return cls.of(TaskType.START_UP, params)

    @classmethod
    def close_down(cls, params: CloseDownParams | None = None) -> AsstTaskParam:
        return cls.of(TaskType.CLOSE_DOWN, params)

    @classmethod
    def fight(cls, params: FightParams | None = None) -> AsstTaskParam:
        return cls.of(TaskType.FIGHT, params)

    @classmethod
    def recruit(cls, params: RecruitParams | None = None) -> AsstTaskParam:
        return cls.of(TaskType.RECRUIT, params)

    @classmethod
    def infrast(cls, params: InfrastParams | None = None) -> AsstTaskParam:
        return cls.of(TaskType.INFRAST, params)

    @classmethod
    def mall(cls, params: MallParams | None = None) -> AsstTaskParam:
        return cls.of(TaskType.MALL, params)

    @classmethod
    def award(cls, params: AwardParams | None = None) -> AsstTaskParam:
        return cls.of(TaskType.AWARD, params)

    @classmethod
    def roguelike(cls, params: RoguelikeParams | None = None) -> AsstTaskParam:
        return cls.of(TaskType.ROGUELIKE, params)

    @property
    def name(self) -> str:
        """The engine's task type string."""
        return self.task_type.value

    @property
    def enabled(self) -> bool:
        """Whether the task runs when appended."""
        return self.params.enable

    @property
    def param(self) -> str:
        """The parameters serialized as the engine's JSON string."""
        return self.params.to_json()
