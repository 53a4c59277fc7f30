# -*- coding: utf-8 -*-
import json
import os
import stat
import sys

import pytest

from src.pipeline import (
    CsvParseError,
    build_records,
    convert_all,
    convert_kind,
    dump_records,
    write_records,
    write_text_atomic,
)


def test_dump_records_layout(make_question):
    text = dump_records([make_question("q1"), make_question("q2", explanation="Café, déjà vu")])
    assert text.startswith("[\n  {\n    \"id\": \"q1\",")
    assert text.endswith("}\n]\n")
    assert "Café, déjà vu" in text
    data = json.loads(text)
    assert [q["id"] for q in data] == ["q1", "q2"]
    assert "misconception" not in data[0]


def test_dump_empty_collection():
    assert dump_records([]) == "[]\n"


def test_write_records_replaces_file_without_leftovers(tmp_path, make_question):
    target = tmp_path / "out" / "questions.json"
    write_records([make_question("old")], target)
    write_records([make_question("new")], target)
    assert json.loads(target.read_text(encoding="utf-8"))[0]["id"] == "new"
    assert sorted(p.name for p in target.parent.iterdir()) == ["questions.json"]


def test_conversion_is_deterministic(content_src, tmp_path):
    out_a = tmp_path / "a"
    out_b = tmp_path / "b"
    convert_all(content_src, out_a)
    convert_all(content_src, out_b)
    for name in ("questions.json", "events.json", "summaries.json"):
        assert (out_a / name).read_bytes() == (out_b / name).read_bytes()


def test_convert_kind_preserves_row_order(content_src, tmp_path):
    count, path = convert_kind("questions", content_src, tmp_path)
    assert count == 2
    assert path == tmp_path / "questions.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [q["id"] for q in data] == ["beach-1", "beach-2"]
    assert data[0]["explanation"] == "Catching food, defense"
    assert data[1]["misconception"] == "They are puddles."


def test_convert_events(content_src, tmp_path):
    convert_kind("events", content_src, tmp_path)
    (event,) = json.loads((tmp_path / "events.json").read_text(encoding="utf-8"))
    assert event["prompt"] == "Plastic, everywhere."
    assert [c["id"] for c in event["choices"]] == ["c1", "c2"]
    assert event["choices"][0]["effects"]["biodiversity"] == 10
    assert event["followUpQuestionIds"] == ["beach-1", "beach-2"]


def test_encoding_error_is_reported_with_line_number(tmp_path):
    src = tmp_path / "events.csv"
    src.write_text(
        "id,locationId,choices\n"
        "e1,start,c1|a|b|health:1||c2|c|d|time:1\n"
        "e2,start,c1|a|b|morale:1||c2|c|d\n",
        encoding="utf-8",
    )
    with pytest.raises(CsvParseError) as exc:
        build_records("events", src)
    assert exc.value.line_number == 3
    assert "morale" in str(exc.value)


def test_parse_failure_writes_nothing(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "summaries.csv").write_text('locationId,title\nstart,"Beach\n', encoding="utf-8")
    out = tmp_path / "out"
    with pytest.raises(CsvParseError):
        convert_kind("summaries", src, out)
    assert not (out / "summaries.json").exists()


def test_unknown_kind(tmp_path):
    with pytest.raises(ValueError):
        build_records("locations", tmp_path / "locations.csv")


def _mode(path):
    return stat.S_IMODE(path.stat().st_mode)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX file modes")
def test_new_output_follows_umask(tmp_path):
    old = os.umask(0o022)
    try:
        target = write_text_atomic(tmp_path / "questions.json", "[]\n")
    finally:
        os.umask(old)
    assert _mode(target) == 0o644


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX file modes")
def test_rewrite_keeps_existing_mode(tmp_path):
    target = tmp_path / "events.json"
    target.write_text("[]\n", encoding="utf-8")
    target.chmod(0o640)
    write_text_atomic(target, "[\n]\n")
    assert _mode(target) == 0o640
    assert target.read_text(encoding="utf-8") == "[\n]\n"
