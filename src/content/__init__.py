# -*- coding: utf-8 -*-
"""内容模型：题目、事件、地点小结的记录结构与只读内容库。"""
from .models import (
    RECORD_MODELS,
    ContentRecord,
    ContentTags,
    EffectVector,
    EventChoice,
    EventContent,
    Location,
    LocationSummary,
    QuestionContent,
    dump_record,
)
from .library import ContentLibrary, read_document

__all__ = [
    "RECORD_MODELS",
    "ContentRecord",
    "ContentTags",
    "EffectVector",
    "EventChoice",
    "EventContent",
    "Location",
    "LocationSummary",
    "QuestionContent",
    "dump_record",
    "ContentLibrary",
    "read_document",
]
