"""Tests for task parameter records."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from maa_types.task import (
    PARAMS_BY_TYPE,
    AsstTaskParam,
    AwardParams,
    ClientType,
    CloseDownParams,
    DronesUsage,
    FightParams,
    InfrastFacility,
    InfrastParams,
    MallParams,
    RecruitParams,
    RoguelikeParams,
    StartUpParams,
    TaskType,
)

_INT_MAX = 2147483647


class TestDefaults:
    """Test the default values of each parameter record."""

    def test_start_up(self) -> None:
        """Verify start up defaults."""
        assert json.loads(StartUpParams().to_json()) == {
            "enable": True,
            "client_type": None,
            "start_game_enabled": False,
        }

    def test_close_down_and_award_share_shape(self) -> None:
        """Verify award reuses the close down record."""
        assert AwardParams is CloseDownParams
        assert json.loads(CloseDownParams().to_json()) == {"enable": True}

    def test_fight(self) -> None:
        """Verify fight defaults and the DrGrandet key."""
        data = json.loads(FightParams().to_json())

        assert data["times"] == _INT_MAX
        assert data["drops"] == {}
        assert data["stage"] is None
        assert data["DrGrandet"] is False
        assert "dr_grandet" not in data

    def test_recruit(self) -> None:
        """Verify recruit defaults."""
        params = RecruitParams()

        assert params.recruitment_time == {"3": 540, "4": 540, "5": 540, "6": 540}
        assert params.expedite_times == _INT_MAX
        assert params.set_time is True
        assert params.skip_robot is True
        assert params.select == []

    def test_recruit_defaults_are_not_shared(self) -> None:
        """Verify mutable defaults are fresh per instance."""
        first = RecruitParams()
        first.select.append(4)
        assert RecruitParams().select == []

    def test_infrast(self) -> None:
        """Verify infrast defaults."""
        data = json.loads(InfrastParams().to_json())

        assert data["facility"] == [
            "Mfg",
            "Trade",
            "Power",
            "Control",
            "Reception",
            "Office",
            "Dorm",
        ]
        assert data["drones"] == "_NotUse"
        assert data["threshold"] == pytest.approx(0.3)

    def test_mall(self) -> None:
        """Verify mall defaults."""
        params = MallParams()
        assert params.buy_first is None
        assert params.force_shopping_if_credit_full is True

    def test_roguelike(self) -> None:
        """Verify roguelike defaults."""
        params = RoguelikeParams()
        assert params.starts_count == _INT_MAX
        assert params.investments_count == _INT_MAX
        assert params.investment_enabled is True


def test_fight_accepts_snake_case_dr_grandet() -> None:
    params = FightParams(dr_grandet=True, client_type=ClientType.TXWY)
    data = json.loads(params.to_json())

    assert data["DrGrandet"] is True
    assert data["client_type"] == "txwy"


def test_infrast_custom_facilities() -> None:
    params = InfrastParams(facility=[InfrastFacility.DORM], drones=DronesUsage.MONEY)
    data = json.loads(params.to_json())

    assert data["facility"] == ["Dorm"]
    assert data["drones"] == "Money"


class TestAsstTaskParam:
    """Test the task type and parameter pairing."""

    @pytest.mark.parametrize("task_type", list(TaskType))
    def test_of_defaults_params(self, task_type: TaskType) -> None:
        """Verify every task type builds with default parameters."""
        task = AsstTaskParam.of(task_type)

        assert task.name == task_type.value
        assert task.enabled is True
        assert isinstance(task.params, PARAMS_BY_TYPE[task_type])
        assert json.loads(task.param)["enable"] is True

    def test_start_up_name(self) -> None:
        """Verify the name matches the engine's task type string."""
        assert AsstTaskParam.of("StartUp").name == "StartUp"

    def test_enabled_follows_params(self) -> None:
        """Verify enabled reads the parameter record."""
        task = AsstTaskParam.of(TaskType.FIGHT, FightParams(enable=False, stage="1-7"))

        assert task.enabled is False
        assert json.loads(task.param)["stage"] == "1-7"

    def test_rejects_mismatched_params(self) -> None:
        """Verify a task type cannot carry another type's parameters."""
        with pytest.raises(ValidationError):
            AsstTaskParam.of(TaskType.FIGHT, MallParams())

    def test_rejects_unknown_type(self) -> None:
        """Verify unknown task type names are rejected."""
        with pytest.raises(ValueError, match="Copilot"):
            AsstTaskParam.of("Copilot")

    @pytest.mark.parametrize(
        ("build", "task_type"),
        [
            (AsstTaskParam.start_up, TaskType.START_UP),
            (AsstTaskParam.close_down, TaskType.CLOSE_DOWN),
            (AsstTaskParam.fight, TaskType.FIGHT),
            (AsstTaskParam.recruit, TaskType.RECRUIT),
            (AsstTaskParam.infrast, TaskType.INFRAST),
            (AsstTaskParam.mall, TaskType.MALL),
            (AsstTaskParam.award, TaskType.AWARD),
            (AsstTaskParam.roguelike, TaskType.ROGUELIKE),
        ],
    )
    def test_named_constructors(self, build, task_type: TaskType) -> None:
        """Verify each named constructor matches ``of`` for its task type."""
        task = build()

        assert task.task_type is task_type
        assert task.name == task_type.value
        assert type(task.params) is PARAMS_BY_TYPE[task_type]
        assert task == AsstTaskParam.of(task_type)

    def test_named_constructor_keeps_params(self) -> None:
        """Verify explicit parameters are passed through unchanged."""
        params = FightParams(stage="1-7", medicine=2)

        task = AsstTaskParam.fight(params)

        assert task.params is params
        assert json.loads(task.param)["medicine"] == 2

    def test_named_constructor_checks_params(self) -> None:
        """Verify a named constructor rejects another task's parameters."""
        with pytest.raises(ValidationError):
            AsstTaskParam.recruit(MallParams())  # type: ignore[arg-type]

    def test_award_uses_close_down_record(self) -> None:
        """Verify award carries the shared close down record."""
        task = AsstTaskParam.award(CloseDownParams(enable=False))

        assert task.name == "Award"
        assert task.enabled is False
