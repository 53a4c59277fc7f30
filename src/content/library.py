# -*- coding: utf-8 -*-
"""
内容库：加载流水线产出的 JSON 文档，按地点/年级段查询题目、事件与地点小结。
与游戏端的内容索引一致，只读，不做校验（校验见 src.validator）。
"""
import json
import random
from pathlib import Path
from typing import Any, List, Optional

from .models import EventContent, LocationSummary, QuestionContent


def read_document(path: Path) -> List[Any]:
    """读取一个内容文档，顶层必须是 JSON 数组。"""
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{p.name}: 顶层应为 JSON 数组，实际为 {type(data).__name__}")
    return data


class ContentLibrary:
    """三类内容的只读集合。"""

    def __init__(
        self,
        questions: Optional[List[QuestionContent]] = None,
        events: Optional[List[EventContent]] = None,
        summaries: Optional[List[LocationSummary]] = None,
    ) -> None:
        self.questions = list(questions or [])
        self.events = list(events or [])
        self.summaries = list(summaries or [])

    @classmethod
    def load(cls, out_dir: Optional[Path] = None) -> "ContentLibrary":
        """从输出目录加载 questions.json / events.json / summaries.json。"""
        from src.utils.config import output_path

        return cls(
            questions=[QuestionContent.model_validate(q) for q in read_document(output_path("questions", out_dir))],
            events=[EventContent.model_validate(e) for e in read_document(output_path("events", out_dir))],
            summaries=[LocationSummary.model_validate(s) for s in read_document(output_path("summaries", out_dir))],
        )

    def questions_for_location(self, location_id: str, grade_band: Optional[str] = None) -> List[QuestionContent]:
        return [
            q for q in self.questions
            if q.location_id == location_id and (not grade_band or q.grade_band == grade_band)
        ]

    def random_questions_for_location(
        self,
        location_id: str,
        count: int,
        grade_band: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> List[QuestionContent]:
        """随机抽取至多 count 道题；传入 rng 可复现。"""
        pool = self.questions_for_location(location_id, grade_band)
        (rng or random).shuffle(pool)
        return pool[:max(0, count)]

    def events_for_location(self, location_id: str, grade_band: Optional[str] = None) -> List[EventContent]:
        return [
            e for e in self.events
            if e.location_id == location_id and (not grade_band or e.grade_band == grade_band)
        ]

    def summary_for_location(self, location_id: str) -> Optional[LocationSummary]:
        for s in self.summaries:
            if s.location_id == location_id:
                return s
        return None
