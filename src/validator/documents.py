# -*- coding: utf-8 -*-
"""
从输出目录加载三类 JSON 文档与地点登记表，然后执行跨内容校验。
文档读不了记一条 unreadable-document 错误并按空集合继续；
单条记录不符合模型记一条 malformed-record 错误并跳过，其余检查照常进行；
被跳过记录的 id 仍计入 id 唯一性检查，也仍可作为事件的后续题目被引用。
"""
from pathlib import Path
from typing import Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from src.content.library import read_document
from src.content.models import RECORD_MODELS
from src.utils import get_logger
from src.utils.config import LOCATIONS_PATH, output_path

from .content_check import validate_content
from .registry import LocationRegistry, load_location_registry
from .report import ValidationReport

_KIND_LABELS = {"questions": "Question", "events": "Event", "summaries": "Summary"}


def _first_error(e: ValidationError) -> str:
    errs = e.errors()
    if not errs:
        return str(e)
    first = errs[0]
    loc = ".".join(str(x) for x in first.get("loc", ()))
    return f"{loc}: {first.get('msg', '')}" if loc else first.get("msg", "")


def load_collection(
    kind: str,
    path: Path,
    report: ValidationReport,
    rejected_ids: Optional[List[str]] = None,
) -> List[BaseModel]:
    """
    加载一类内容文档；问题写进 report，不抛异常。
    :param rejected_ids: 传入时收集被拒记录的原始 id，供后续 id 唯一性与引用检查使用
    """
    model: Type[BaseModel] = RECORD_MODELS[kind]
    try:
        items = read_document(path)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError 是 ValueError 的子类
        report.error("unreadable-document", f"Cannot read {kind} document {path}: {e}", str(path))
        return []
    records = []
    for i, item in enumerate(items):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            raw_id = item.get("id") if isinstance(item, dict) else None
            record_id = str(raw_id) if raw_id else None
            label = f"{_KIND_LABELS[kind]} {record_id}" if record_id else f"{_KIND_LABELS[kind]} #{i + 1}"
            report.error("malformed-record", f"{label} is malformed ({_first_error(e)})", record_id)
            if rejected_ids is not None and record_id:
                rejected_ids.append(record_id)
    return records


def load_registry(path: Path, report: ValidationReport) -> LocationRegistry:
    try:
        return load_location_registry(path)
    except (OSError, ValueError, ValidationError) as e:
        report.error("unreadable-document", f"Cannot read location registry {path}: {e}", str(path))
        return LocationRegistry()


def validate_documents(
    out_dir: Optional[Union[str, Path]] = None,
    locations_path: Optional[Union[str, Path]] = None,
    registry: Optional[LocationRegistry] = None,
) -> ValidationReport:
    """
    加载 questions.json / events.json / summaries.json 并校验。
    :param registry: 直接传入登记表时不再读取 locations_path
    """
    log = get_logger()
    report = ValidationReport()
    out = Path(out_dir) if out_dir else None
    rejected: Dict[str, List[str]] = {"questions": [], "events": []}
    questions = load_collection("questions", output_path("questions", out), report, rejected["questions"])
    events = load_collection("events", output_path("events", out), report, rejected["events"])
    summaries = load_collection("summaries", output_path("summaries", out), report)
    if registry is None:
        registry = load_registry(Path(locations_path or LOCATIONS_PATH), report)
    log.info(
        "已加载 %s 道题目、%s 个事件、%s 条地点小结，登记地点 %s 个",
        len(questions), len(events), len(summaries), len(registry),
    )
    validate_content(questions, events, summaries, registry, report, rejected)
    log.info("校验完成: 错误 %s 条, 告警 %s 条", len(report.errors), len(report.warnings))
    return report
