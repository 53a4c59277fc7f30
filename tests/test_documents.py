# -*- coding: utf-8 -*-
"""从输出目录加载 JSON 文档后的校验：文档级与记录级问题都进报告，不抛异常。"""
import json

import pytest

from src.pipeline import convert_all
from src.validator import LocationRegistry, ValidationReport, load_collection, validate_documents


def _write(directory, name, data):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_converted_fixture_content_passes(content_src, tmp_path, locations_file):
    out = tmp_path / "out"
    convert_all(content_src, out)
    report = validate_documents(out_dir=out, locations_path=locations_file)
    assert report.passed, report.errors
    assert report.warnings == []


def test_malformed_record_is_reported_and_skipped(tmp_path):
    report = ValidationReport()
    path = _write(tmp_path, "questions.json", [
        {"id": "q1", "locationId": "start", "answers": 5},
        {"id": "q2", "locationId": "start", "answers": ["a", "b", "c", "d"], "correctIndex": 0},
    ])
    records = load_collection("questions", path, report)
    assert [r.id for r in records] == ["q2"]
    (issue,) = report.errors
    assert issue.code == "malformed-record"
    assert issue.subject == "q1"
    assert issue.message.startswith("Question q1 is malformed (answers")


def test_unreadable_documents(tmp_path):
    out = tmp_path / "out"
    _write(out, "questions.json", {"not": "a list"})
    (out / "events.json").write_text("[{", encoding="utf-8")
    # summaries.json 不存在
    report = validate_documents(out_dir=out, registry=LocationRegistry(["start"]))
    unreadable = [i for i in report.errors if i.code == "unreadable-document"]
    assert len(unreadable) == 3
    assert not report.passed


def test_broken_registry_is_an_error(tmp_path):
    out = tmp_path / "out"
    for name in ("questions.json", "events.json", "summaries.json"):
        _write(out, name, [])
    registry_path = _write(tmp_path, "locations.json", [42])
    report = validate_documents(out_dir=out, locations_path=registry_path)
    assert report.codes() == ["unreadable-document"]


def test_missing_registry_makes_locations_unknown(content_src, tmp_path):
    out = tmp_path / "out"
    convert_all(content_src, out)
    report = validate_documents(out_dir=out, locations_path=tmp_path / "missing.json")
    assert "unknown-location" in report.codes()


def _question(id="q1", **overrides):
    data = {
        "id": id,
        "locationId": "start",
        "gradeBand": "4-5",
        "difficulty": "easy",
        "question": "What do crabs use their claws for?",
        "answers": ["Fighting", "Catching food", "Swimming", "Singing"],
        "correctIndex": 1,
        "explanation": "Claws catch food.",
        "tags": {"ngss": ["MS-LS1-4"], "epc": ["Principle I"], "topic": []},
    }
    data.update(overrides)
    return data


def _event(id="e1", follow_ups=(), effects=None):
    choice = {
        "id": "c1",
        "label": "Clean up",
        "outcome": "Birds return.",
        "effects": effects or {"health": -5, "supplies": 0, "biodiversity": 10, "time": 0},
        "tags": {"ngss": ["MS-ESS3-3"], "epc": ["Principle IV"], "topic": []},
    }
    return {
        "id": id,
        "locationId": "start",
        "gradeBand": "4-5",
        "type": "hazard",
        "title": "Plastic Tide",
        "prompt": "Plastic washed up.",
        "choices": [choice, dict(choice, id="c2")],
        "followUpQuestionIds": list(follow_ups),
    }


def _validate(tmp_path, questions=(), events=()):
    out = tmp_path / "out"
    _write(out, "questions.json", list(questions))
    _write(out, "events.json", list(events))
    _write(out, "summaries.json", [])
    return validate_documents(out_dir=out, registry=LocationRegistry(["start"]))


@pytest.mark.parametrize("raw", ["2", True, None, 1.5])
def test_correct_index_is_not_coerced(tmp_path, raw):
    report = _validate(tmp_path, [_question(correctIndex=raw)])
    assert report.codes() == ["invalid-index"]


def test_integral_float_correct_index_is_an_integer(tmp_path):
    report = _validate(tmp_path, [_question(correctIndex=1.0)])
    assert report.passed
    (question,) = load_collection("questions", tmp_path / "out" / "questions.json", ValidationReport())
    assert question.correct_index == 1
    assert type(question.correct_index) is int


def test_string_effect_value_is_malformed(tmp_path):
    effects = {"health": "5", "supplies": 0, "biodiversity": 0, "time": 0}
    report = _validate(tmp_path, events=[_event(effects=effects)])
    (issue,) = report.errors
    assert issue.code == "malformed-record"
    assert issue.subject == "e1"


@pytest.mark.parametrize("field, value", [("answers", ["a", "b", "c", 4]), ("locationId", 7)])
def test_non_string_text_fields_are_malformed(tmp_path, field, value):
    report = _validate(tmp_path, [_question(**{field: value})])
    assert report.codes() == ["malformed-record"]


def test_follow_up_to_malformed_question_is_not_dangling(tmp_path):
    report = _validate(tmp_path, [_question("q-bad", answers=5)], [_event(follow_ups=["q-bad"])])
    assert report.codes() == ["malformed-record"]


def test_malformed_record_still_claims_its_id(tmp_path):
    report = _validate(tmp_path, [_question("q1"), _question("q1", answers=5)], [_event("q1", effects={"health": "x"})])
    assert report.codes().count("malformed-record") == 2
    assert [i.message for i in report.errors if i.code == "duplicate-id"] == [
        "Duplicate id: q1 (question)",
        "Duplicate id: q1 (event)",
    ]
