"""Shared fixtures: minimal valid payloads as the engine sends them."""

from __future__ import annotations

import json
from typing import Any

import pytest

EXTRA_INFO_DETAILS: dict[str, dict[str, Any] | None] = {
    "StageDrops": {
        "stage": {"stageCode": "1-7", "stageId": "main_01-07"},
        "stars": 3,
        "stats": [{"itemId": "30012", "itemName": "Orirock Cube", "quantity": 4, "addQuantity": 2}],
    },
    "RecruitTagsDetected": {"tags": ["Healing", "Senior Operator"]},
    "RecruitSpecialTag": {"tag": "Senior Operator"},
    "RecruitResult": {
        "tags": ["Healing"],
        "level": 4,
        "result": [{"tags": ["Healing"], "level": 4, "opers": [{"name": "Perfumer", "level": 4}]}],
    },
    "RecruitTagsRefreshed": {"count": 1, "refresh_limit": 3},
    "RecruitTagsSelected": {"tags": ["Healing"]},
    "RecruitSlotCompleted": None,
    "RecruitError": None,
    "EnterFacility": {"facility": "Mfg", "index": 0},
    "NotEnoughStaff": {"facility": "Trade", "index": 1},
    "ProductOfFacility": {"product": "Money", "facility": "Mfg", "index": 2},
    "StageInfo": {"name": "1-7"},
    "StageInfoError": None,
    "PenguinId": {"id": "12345678"},
    "Depot": {
        "done": True,
        "arkplanner": {
            "object": {
                "items": [{"id": "30012", "have": 120, "name": "Orirock Cube"}],
                "@type": "@penguin-statistics/depot",
            },
            "data": "{}",
        },
        "lolicon": {"object": {"30012": 120}, "data": "{}"},
    },
    "OperBox": {
        "done": True,
        "all_oper": [{"id": "char_002_amiya", "name": "Amiya", "own": True, "rarity": 5}],
        "own_opers": [
            {
                "id": "char_002_amiya",
                "name": "Amiya",
                "own": True,
                "elite": 2,
                "level": 50,
                "potential": 6,
                "rarity": 5,
            }
        ],
    },
    "UnsupportedLevel": None,
}


def extra_info_payload(what: str, details: Any = None, **overrides: Any) -> str:
    """Build a subtask extra info payload; ``details=None`` omits the field."""
    body: dict[str, Any] = {
        "taskchain": "Fight",
        "class": "asst::StageDropsTaskPlugin",
        "uuid": "device-uuid",
        "what": what,
    }
    if details is not None:
        body["details"] = details
    body.update(overrides)
    return json.dumps(body)


@pytest.fixture
def taskchain_payload() -> str:
    return json.dumps({"taskchain": "Fight", "uuid": "device-uuid", "taskid": 7})


@pytest.fixture
def process_task_payload() -> str:
    return json.dumps(
        {
            "taskchain": "Fight",
            "class": "asst::ProcessTask",
            "uuid": "device-uuid",
            "subtask": "ProcessTask",
            "details": {
                "task": "MedicineConfirm",
                "action": 512,
                "exec_times": 1,
                "max_times": 2147483647,
                "algorithm": 0,
            },
        }
    )


@pytest.fixture
def extra_info_details() -> dict[str, dict[str, Any] | None]:
    return EXTRA_INFO_DETAILS


@pytest.fixture
def make_extra_info_payload():
    return extra_info_payload
