# -*- coding: utf-8 -*-
"""
游戏内容记录的 Pydantic 模型：题目、事件（含选项）、地点小结与地点登记表。
字段名与游戏端读取的 JSON 一致（camelCase 别名）；Python 侧统一用 snake_case。
必填字段一律允许缺省为 None：构建阶段不做行级校验，由校验器带上下文统一报告。
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator


class ContentTags(BaseModel):
    """课程标准对齐标签；顺序无关，允许重复，流水线不去重。"""
    ngss: List[StrictStr] = Field(default_factory=list, description="NGSS 表现期望代码")
    epc: List[StrictStr] = Field(default_factory=list, description="加州 EP&C 原则/概念")
    topic: List[StrictStr] = Field(default_factory=list, description="自由文本主题")


class EffectVector(BaseModel):
    """选项后果：四个固定键的整数增量，未指定为 0。"""
    health: StrictInt = 0
    supplies: StrictInt = 0
    biodiversity: StrictInt = 0
    time: StrictInt = 0

    class Config:
        extra = "forbid"


class EventChoice(BaseModel):
    """事件选项；id 只在所属事件内有意义，不参与全局唯一性检查。"""
    id: Optional[StrictStr] = None
    label: Optional[StrictStr] = None
    outcome: Optional[StrictStr] = None
    effects: EffectVector = Field(default_factory=EffectVector)
    tags: ContentTags = Field(default_factory=ContentTags)


class QuestionContent(BaseModel):
    """选择题：恰好 4 个答案，correctIndex ∈ [0, 3]（由校验器检查）。"""
    id: Optional[StrictStr] = None
    location_id: Optional[StrictStr] = Field(default=None, alias="locationId")
    grade_band: Optional[StrictStr] = Field(default=None, alias="gradeBand")
    difficulty: Optional[StrictStr] = None
    question: Optional[StrictStr] = None
    answers: List[StrictStr] = Field(default_factory=list)
    # 原样保留字符串、布尔与非整数值，交给校验器报 invalid-index
    correct_index: Optional[Union[StrictInt, StrictFloat, StrictBool, StrictStr]] = Field(default=None, alias="correctIndex")
    explanation: Optional[StrictStr] = None
    misconception: Optional[StrictStr] = Field(default=None, description="为空时整个字段省略，而不是 null")
    tags: ContentTags = Field(default_factory=ContentTags)

    class Config:
        populate_by_name = True

    @field_validator("correct_index")
    @classmethod
    def integral_float_as_int(cls, v):
        """JSON 里的 1.0 与 1 等价。"""
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v


class EventContent(BaseModel):
    """地图事件：至少 2 个选项，followUpQuestionIds 须指向已存在的题目。"""
    id: Optional[StrictStr] = None
    location_id: Optional[StrictStr] = Field(default=None, alias="locationId")
    grade_band: Optional[StrictStr] = Field(default=None, alias="gradeBand")
    type: Optional[StrictStr] = Field(default=None, description="hazard / decision / restoration")
    title: Optional[StrictStr] = None
    prompt: Optional[StrictStr] = None
    choices: List[EventChoice] = Field(default_factory=list)
    follow_up_question_ids: List[StrictStr] = Field(default_factory=list, alias="followUpQuestionIds")

    class Config:
        populate_by_name = True


class LocationSummary(BaseModel):
    """地点小结；不要求唯一，但 locationId 必须是已登记地点。"""
    location_id: Optional[StrictStr] = Field(default=None, alias="locationId")
    title: Optional[StrictStr] = None
    summary: Optional[StrictStr] = None
    key_takeaway: Optional[StrictStr] = Field(default=None, alias="keyTakeaway")
    tags: ContentTags = Field(default_factory=ContentTags)

    class Config:
        populate_by_name = True


class Location(BaseModel):
    """地图地点（登记表条目）。"""
    id: StrictStr = Field(..., description="地点 id，如 start / wetlands")
    name: StrictStr = Field(default="")
    description: StrictStr = Field(default="")
    ecosystem: StrictStr = Field(default="")
    x: StrictInt = 0
    y: StrictInt = 0


# 内容类型 -> 记录模型
RECORD_MODELS = {
    "questions": QuestionContent,
    "events": EventContent,
    "summaries": LocationSummary,
}

ContentRecord = Union[QuestionContent, EventContent, LocationSummary]


def dump_record(record: BaseModel) -> Dict[str, Any]:
    """按 JSON 契约导出：camelCase 字段名，None 字段省略。"""
    return record.model_dump(by_alias=True, exclude_none=True)
