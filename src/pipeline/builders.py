# -*- coding: utf-8 -*-
"""
记录构建：把一行 字段名 -> 原始字符串 映射成题目/事件/地点小结记录。
这里不做行级校验：缺失的单元格原样以 None 传下去，由校验器带上下文报告。
"""
import math
from typing import Callable, Dict, Optional, Union

from pydantic import BaseModel

from src.content.models import ContentTags, EventContent, LocationSummary, QuestionContent

from .fields import parse_choice_block, split_list
from .reader import CsvRow


def _text(row: CsvRow, name: str) -> Optional[str]:
    """直通字段：原样复制；缺失的单元格为 None。"""
    return row.get(name)


def parse_index(raw: Optional[str]) -> Optional[Union[int, float]]:
    """数值解析；整数值返回 int，非整数保留为 float，无法解析或为空时为 None。"""
    if raw is None or not raw.strip():
        return None
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def build_tags(row: CsvRow) -> ContentTags:
    return ContentTags(
        ngss=split_list(row.get("ngss")),
        epc=split_list(row.get("epc")),
        topic=split_list(row.get("topic")),
    )


def build_question(row: CsvRow) -> QuestionContent:
    return QuestionContent(
        id=_text(row, "id"),
        location_id=_text(row, "locationId"),
        grade_band=_text(row, "gradeBand"),
        difficulty=_text(row, "difficulty"),
        question=_text(row, "question"),
        answers=split_list(row.get("answers")),
        correct_index=parse_index(row.get("correctIndex")),
        explanation=_text(row, "explanation"),
        # 空单元格视为字段不存在
        misconception=row.get("misconception") or None,
        tags=build_tags(row),
    )


def build_event(row: CsvRow) -> EventContent:
    """事件：choices 单元格按选项块编码解析，可能抛 EncodingError。"""
    return EventContent(
        id=_text(row, "id"),
        location_id=_text(row, "locationId"),
        grade_band=_text(row, "gradeBand"),
        type=_text(row, "type"),
        title=_text(row, "title"),
        prompt=_text(row, "prompt"),
        choices=parse_choice_block(row.get("choices")),
        follow_up_question_ids=split_list(row.get("followUpQuestionIds")),
    )


def build_summary(row: CsvRow) -> LocationSummary:
    return LocationSummary(
        location_id=_text(row, "locationId"),
        title=_text(row, "title"),
        summary=_text(row, "summary"),
        key_takeaway=_text(row, "keyTakeaway"),
        tags=build_tags(row),
    )


# 内容类型 -> 构建函数
BUILDERS: Dict[str, Callable[[CsvRow], BaseModel]] = {
    "questions": build_question,
    "events": build_event,
    "summaries": build_summary,
}
