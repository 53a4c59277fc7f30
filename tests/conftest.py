# -*- coding: utf-8 -*-
"""测试公共夹具：记录工厂与临时内容目录。"""
import json
from pathlib import Path

import pytest

from src.content.models import ContentTags, EventChoice, EventContent, LocationSummary, QuestionContent
from src.utils import get_logger


@pytest.fixture(autouse=True, scope="session")
def _session_logger():
    # 在会话级 stdout 上挂好 handler，避免绑定到某个测试的 capsys 流
    get_logger()


@pytest.fixture
def make_question():
    def _make(id="q1", location_id="start", ngss=("MS-LS1-4",), epc=("Principle I",), **overrides):
        data = dict(
            id=id,
            location_id=location_id,
            grade_band="4-5",
            difficulty="easy",
            question="What do crabs use their claws for?",
            answers=["Only for fighting", "Catching food and defense", "Swimming", "Making sounds"],
            correct_index=1,
            explanation="Claws catch food.",
            tags=ContentTags(ngss=list(ngss), epc=list(epc), topic=["adaptations"]),
        )
        data.update(overrides)
        return QuestionContent(**data)
    return _make


@pytest.fixture
def make_choice():
    def _make(id="c1", ngss=("MS-ESS3-3",), epc=("Principle IV",), **overrides):
        data = dict(
            id=id,
            label="Clean up",
            outcome="The beach is cleaner.",
            tags=ContentTags(ngss=list(ngss), epc=list(epc), topic=["pollution"]),
        )
        data.update(overrides)
        return EventChoice(**data)
    return _make


@pytest.fixture
def make_event(make_choice):
    def _make(id="e1", location_id="start", follow_ups=(), choices=None, **overrides):
        data = dict(
            id=id,
            location_id=location_id,
            grade_band="4-5",
            type="hazard",
            title="Plastic Tide",
            prompt="Plastic washed up.",
            choices=choices if choices is not None else [make_choice("c1"), make_choice("c2")],
            follow_up_question_ids=list(follow_ups),
        )
        data.update(overrides)
        return EventContent(**data)
    return _make


@pytest.fixture
def make_summary():
    def _make(location_id="start", ngss=("MS-LS2-1",), epc=("Principle II",), **overrides):
        data = dict(
            location_id=location_id,
            title="Coastal Beach",
            summary="Beaches connect land and ocean.",
            key_takeaway="Keep plastic out of the ocean.",
            tags=ContentTags(ngss=list(ngss), epc=list(epc), topic=[]),
        )
        data.update(overrides)
        return LocationSummary(**data)
    return _make


QUESTIONS_CSV = (
    "id,locationId,gradeBand,difficulty,question,answers,correctIndex,explanation,misconception,ngss,epc,topic\n"
    "beach-1,start,4-5,easy,What do crabs use their claws for?,A|B|C|D,1,"
    "\"Catching food, defense\",,MS-LS1-4,Principle I,adaptations\n"
    "beach-2,start,6-8,medium,Why are tide pools important?,A|B|C|D,2,Shelter.,They are puddles.,"
    "MS-LS2-1|MS-LS2-2,Principle II,tide pools|habitats\n"
)

EVENTS_CSV = (
    "id,locationId,gradeBand,type,title,prompt,choices,followUpQuestionIds\n"
    "beach-event-1,start,4-5,hazard,Plastic Tide,\"Plastic, everywhere.\","
    "c1|Clean up|Birds return.|health:-5;biodiversity:10|MS-ESS3-3|Principle IV|pollution"
    "||c2|Walk on|Plastic drifts away.|time:1|MS-ESS3-3|Principle II|pollution,beach-1|beach-2\n"
)

SUMMARIES_CSV = (
    "locationId,title,summary,keyTakeaway,ngss,epc,topic\n"
    "start,Coastal Beach,\"Crabs, birds, and tide pools.\",Keep plastic out.,MS-LS2-1,Principle I,coasts\n"
)


@pytest.fixture
def content_src(tmp_path) -> Path:
    """写好三份小型源 CSV 的目录。"""
    src = tmp_path / "content-src"
    src.mkdir()
    (src / "questions.csv").write_text(QUESTIONS_CSV, encoding="utf-8")
    (src / "events.csv").write_text(EVENTS_CSV, encoding="utf-8")
    (src / "summaries.csv").write_text(SUMMARIES_CSV, encoding="utf-8")
    return src


@pytest.fixture
def locations_file(tmp_path) -> Path:
    path = tmp_path / "locations.json"
    path.write_text(json.dumps([{"id": "start", "name": "Coastal Beach"}, "wetlands"]), encoding="utf-8")
    return path
