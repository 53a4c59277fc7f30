# -*- coding: utf-8 -*-
"""
单元格内紧凑编码的解析与回写。

- 列表：``a | b | c`` -> ["a", "b", "c"]（NGSS、EP&C、主题、后续题目 id）
- 效果：``health:-10;supplies:5`` -> EffectVector，只接受四个固定键
- 选项块：``||`` 分隔选项，``|`` 分隔选项内的固定字段
  ``id|label|outcome|effects|ngss|epc|topic``，主题是最后一个具名字段而不是剩余字段的拼接
"""
from typing import Iterable, List, Optional

from src.content.models import ContentTags, EffectVector, EventChoice
from src.utils.config import EFFECT_KEYS

from .errors import EncodingError

LIST_SEPARATOR = "|"
CHOICE_SEPARATOR = "||"
EFFECT_PAIR_SEPARATOR = ";"
EFFECT_KV_SEPARATOR = ":"

CHOICE_FIELDS = ("id", "label", "outcome", "effects", "ngss", "epc", "topic")


def split_list(raw: Optional[str]) -> List[str]:
    """按 | 拆分并去掉首尾空白；空值返回空列表。元素不去重、不过滤。"""
    if not raw or not raw.strip():
        return []
    return [s.strip() for s in raw.split(LIST_SEPARATOR)]


def parse_effects(raw: Optional[str]) -> EffectVector:
    """
    解析 ``key:value;key:value``，未出现的键为 0。
    键或值为空的片段跳过；未知键、非整数值抛 EncodingError。
    """
    effects = {key: 0 for key in EFFECT_KEYS}
    if not raw or not raw.strip():
        return EffectVector(**effects)
    for pair in raw.split(EFFECT_PAIR_SEPARATOR):
        parts = pair.split(EFFECT_KV_SEPARATOR)
        key = parts[0].strip()
        value = parts[1].strip() if len(parts) > 1 else ""
        if not key or not value:
            continue
        if len(parts) > 2:
            raise EncodingError(f"效果片段格式应为 key:value: {pair.strip()!r}")
        if key not in EFFECT_KEYS:
            raise EncodingError(f"未知效果键 {key!r}（允许: {', '.join(EFFECT_KEYS)}）")
        try:
            effects[key] = int(value)
        except ValueError:
            raise EncodingError(f"效果 {key} 的值不是整数: {value!r}") from None
    return EffectVector(**effects)


def parse_choice(chunk: str) -> EventChoice:
    """解析单个选项；字段不足按空处理，超过固定字段数抛 EncodingError。"""
    parts = [p.strip() for p in chunk.split(LIST_SEPARATOR)]
    if len(parts) > len(CHOICE_FIELDS):
        raise EncodingError(
            f"选项字段过多（{len(parts)} > {len(CHOICE_FIELDS)}，顺序为 {'|'.join(CHOICE_FIELDS)}）: {chunk!r}"
        )
    parts += [""] * (len(CHOICE_FIELDS) - len(parts))
    choice_id, label, outcome, effects_raw, ngss_raw, epc_raw, topic_raw = parts
    return EventChoice(
        id=choice_id or None,
        label=label or None,
        outcome=outcome or None,
        effects=parse_effects(effects_raw),
        tags=ContentTags(
            ngss=split_list(ngss_raw),
            epc=split_list(epc_raw),
            topic=split_list(topic_raw),
        ),
    )


def parse_choice_block(raw: Optional[str]) -> List[EventChoice]:
    """按 || 拆成选项（去空白、丢弃空片段），逐个解析。"""
    if not raw:
        return []
    chunks = [c.strip() for c in raw.split(CHOICE_SEPARATOR)]
    return [parse_choice(c) for c in chunks if c]


# ---------- 回写：与上面的解析互逆（用于往返测试与内容工具） ----------


def join_list(values: Iterable[str]) -> str:
    return LIST_SEPARATOR.join(values)


def format_effects(effects: EffectVector) -> str:
    """只写出非零键，按固定键顺序。"""
    return EFFECT_PAIR_SEPARATOR.join(
        f"{key}{EFFECT_KV_SEPARATOR}{getattr(effects, key)}"
        for key in EFFECT_KEYS
        if getattr(effects, key)
    )


def format_choice_block(choices: Iterable[EventChoice]) -> str:
    """
    选项块回写。选项内的标签槽位只能放一个值（多值会与字段分隔符冲突）；
    尾部空字段省略，中间的空字段会与 || 冲突：效果槽位写成 health:0，其余直接拒绝。
    """
    encoded = []
    for choice in choices:
        for name in ("ngss", "epc", "topic"):
            if len(getattr(choice.tags, name)) > 1:
                raise EncodingError(f"选项 {choice.id} 的 {name} 只能有一个值")
        fields = [
            choice.id or "",
            choice.label or "",
            choice.outcome or "",
            format_effects(choice.effects),
            join_list(choice.tags.ngss),
            join_list(choice.tags.epc),
            join_list(choice.tags.topic),
        ]
        while fields and not fields[-1]:
            fields.pop()
        if len(fields) > 4 and not fields[3]:
            fields[3] = f"{EFFECT_KEYS[0]}{EFFECT_KV_SEPARATOR}0"
        if "" in fields:
            raise EncodingError(f"选项 {choice.id} 含空的中间字段，无法与 || 区分")
        encoded.append(LIST_SEPARATOR.join(fields))
    return CHOICE_SEPARATOR.join(encoded)
