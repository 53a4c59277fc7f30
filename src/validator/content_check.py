# -*- coding: utf-8 -*-
"""
跨内容校验：全局 id 唯一、地点与后续题目引用完整、结构约束，以及按地点汇总的标签覆盖。
从不在第一个错误处停下：一次运行收集全部错误与告警。
每次调用都从零重新汇总，不做增量更新。
"""
import math
from typing import Dict, Iterable, List, Optional, Set

from pydantic import BaseModel, Field

from src.content.models import ContentTags, EventContent, LocationSummary, QuestionContent
from src.utils.config import (
    ANSWER_COUNT,
    DIFFICULTIES,
    EPC_COVERAGE_DIVISOR,
    EVENT_TYPES,
    GRADE_BANDS,
    MIN_EVENT_CHOICES,
)

from .registry import LocationRegistry
from .report import ValidationReport


class LocationAggregate(BaseModel):
    """单个地点在题目、事件选项、地点小结上的标签汇总（仅校验期间存在）。"""
    ngss: Set[str] = Field(default_factory=set)
    epc: Set[str] = Field(default_factory=set)
    question_count: int = 0
    questions_with_epc_count: int = 0

    def fold_tags(self, tags: ContentTags) -> None:
        self.ngss.update(tags.ngss)
        self.epc.update(tags.epc)


def required_epc_questions(question_count: int) -> int:
    """至少带 EP&C 标签的题目数：ceil(题目数 / 3)。"""
    return math.ceil(question_count / EPC_COVERAGE_DIVISOR)


def _is_valid_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < ANSWER_COUNT


def _label(kind: str, record_id: Optional[str], position: int) -> str:
    """报告里引用一条记录：有 id 用 id，否则用序号。"""
    return f"{kind} {record_id}" if record_id else f"{kind} #{position + 1}"


class ContentValidator:
    """一次完整校验：check_* 各自负责一类内容，run() 按固定顺序执行。"""

    def __init__(
        self,
        questions: Iterable[QuestionContent],
        events: Iterable[EventContent],
        summaries: Iterable[LocationSummary],
        registry: LocationRegistry,
        report: Optional[ValidationReport] = None,
        rejected_ids: Optional[Dict[str, Iterable[str]]] = None,
    ) -> None:
        self.questions = list(questions)
        self.events = list(events)
        self.summaries = list(summaries)
        self.registry = registry
        self.report = report if report is not None else ValidationReport()
        self.aggregates: Dict[str, LocationAggregate] = {}
        # 加载时因 malformed-record 被跳过的记录 id：仍占用 id，仍可被后续题目引用
        rejected_ids = rejected_ids or {}
        self.rejected_question_ids = [i for i in rejected_ids.get("questions", ()) if i]
        self.rejected_event_ids = [i for i in rejected_ids.get("events", ()) if i]

    def _aggregate(self, location_id: str) -> LocationAggregate:
        if location_id not in self.aggregates:
            self.aggregates[location_id] = LocationAggregate()
        return self.aggregates[location_id]

    def _check_enum(self, label: str, field: str, value: Optional[str], allowed: Iterable[str], subject: Optional[str]) -> None:
        allowed = tuple(allowed)
        if value not in allowed:
            self.report.error(
                "invalid-enum",
                f"{label} has invalid {field} {value!r} (expected one of {', '.join(allowed)})",
                subject,
            )

    # ---------- 1. 全局 id 唯一 ----------

    def check_unique_ids(self) -> None:
        seen: Set[str] = set()
        tagged = (
            [("question", q.id) for q in self.questions]
            + [("question", i) for i in self.rejected_question_ids]
            + [("event", e.id) for e in self.events]
            + [("event", i) for i in self.rejected_event_ids]
        )
        for kind, record_id in tagged:
            if not record_id:
                continue
            if record_id in seen:
                self.report.error("duplicate-id", f"Duplicate id: {record_id} ({kind})", record_id)
            else:
                seen.add(record_id)

    # ---------- 2. 题目 ----------

    def check_questions(self) -> None:
        for i, q in enumerate(self.questions):
            label = _label("Question", q.id, i)
            if not q.id or not q.location_id:
                self.report.error("missing-field", f"{label} missing id or locationId", q.id)
            if q.location_id and q.location_id not in self.registry:
                self.report.error("unknown-location", f"{label} has unknown locationId {q.location_id}", q.id)
            if len(q.answers) != ANSWER_COUNT:
                self.report.error(
                    "answer-count",
                    f"{label} must have {ANSWER_COUNT} answers (found {len(q.answers)})",
                    q.id,
                )
            if not _is_valid_index(q.correct_index):
                self.report.error("invalid-index", f"{label} has invalid correctIndex {q.correct_index!r}", q.id)
            self._check_enum(label, "gradeBand", q.grade_band, GRADE_BANDS, q.id)
            self._check_enum(label, "difficulty", q.difficulty, DIFFICULTIES, q.id)

            if not q.tags.epc:
                self.report.warn("missing-epc-tag", f"{label} missing epc tags", q.id)
            if not q.location_id:
                continue
            agg = self._aggregate(q.location_id)
            agg.question_count += 1
            if q.tags.epc:
                agg.questions_with_epc_count += 1
            agg.fold_tags(q.tags)

    # ---------- 3. 事件 ----------

    def check_events(self) -> None:
        question_ids = {q.id for q in self.questions if q.id} | set(self.rejected_question_ids)
        for i, e in enumerate(self.events):
            label = _label("Event", e.id, i)
            if not e.id or not e.location_id:
                self.report.error("missing-field", f"{label} missing id or locationId", e.id)
            if e.location_id and e.location_id not in self.registry:
                self.report.error("unknown-location", f"{label} has unknown locationId {e.location_id}", e.id)
            if len(e.choices) < MIN_EVENT_CHOICES:
                self.report.error(
                    "too-few-choices",
                    f"{label} must have at least {MIN_EVENT_CHOICES} choices (found {len(e.choices)})",
                    e.id,
                )
            self._check_enum(label, "gradeBand", e.grade_band, GRADE_BANDS, e.id)
            self._check_enum(label, "type", e.type, EVENT_TYPES, e.id)
            if e.location_id:
                agg = self._aggregate(e.location_id)
                for choice in e.choices:
                    agg.fold_tags(choice.tags)
            for qid in e.follow_up_question_ids:
                if qid not in question_ids:
                    self.report.error("dangling-reference", f"{label} references unknown question {qid}", e.id)

    # ---------- 4. 地点小结 ----------

    def check_summaries(self) -> None:
        for i, s in enumerate(self.summaries):
            if not s.location_id:
                self.report.error("missing-field", f"Summary #{i + 1} missing locationId")
                continue
            if s.location_id not in self.registry:
                self.report.error("unknown-location", f"Summary for unknown locationId {s.location_id}", s.location_id)
            self._aggregate(s.location_id).fold_tags(s.tags)

    # ---------- 5. 按地点的标签覆盖 ----------

    def check_coverage(self) -> None:
        for location_id, agg in self.aggregates.items():
            if not agg.ngss:
                self.report.error("missing-ngss", f"Location {location_id} missing NGSS tags across content", location_id)
            if not agg.epc:
                self.report.error("missing-epc", f"Location {location_id} missing EP&C tags across content", location_id)
            if agg.question_count > 0:
                required = required_epc_questions(agg.question_count)
                if agg.questions_with_epc_count < required:
                    self.report.warn(
                        "epc-coverage",
                        f"Location {location_id} has {agg.questions_with_epc_count}/{agg.question_count} "
                        f"questions with EP&C tags (needs at least {required})",
                        location_id,
                    )

    def run(self) -> ValidationReport:
        self.check_unique_ids()
        self.check_questions()
        self.check_events()
        self.check_summaries()
        self.check_coverage()
        return self.report


def validate_content(
    questions: Iterable[QuestionContent],
    events: Iterable[EventContent],
    summaries: Iterable[LocationSummary],
    location_ids: Iterable[str],
    report: Optional[ValidationReport] = None,
    rejected_ids: Optional[Dict[str, Iterable[str]]] = None,
) -> ValidationReport:
    """
    对已加载的三类记录做一次完整校验。
    :param location_ids: 合法地点 id（LocationRegistry 或任意字符串可迭代对象）
    :param report: 可传入已有报告（如加载阶段已记录的错误），结果追加其后
    :param rejected_ids: 内容类型 -> 加载时被拒的记录 id，参与 id 唯一性与后续题目引用检查
    """
    registry = location_ids if isinstance(location_ids, LocationRegistry) else LocationRegistry(location_ids)
    return ContentValidator(questions, events, summaries, registry, report, rejected_ids).run()
