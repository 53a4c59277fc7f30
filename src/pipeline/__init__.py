# -*- coding: utf-8 -*-
"""内容流水线：CSV 读取 → 单元格紧凑编码解析 → 记录构建 → JSON 输出。"""
from .errors import ContentPipelineError, CsvParseError, EncodingError
from .reader import parse_csv, read_csv, tokenize_line, zip_row
from .fields import (
    CHOICE_FIELDS,
    format_choice_block,
    format_effects,
    join_list,
    parse_choice,
    parse_choice_block,
    parse_effects,
    split_list,
)
from .builders import BUILDERS, build_event, build_question, build_summary, build_tags, parse_index
from .emitter import dump_records, write_records, write_text_atomic
from .convert import CONVERT_ORDER, build_records, convert_all, convert_kind

__all__ = [
    "ContentPipelineError",
    "CsvParseError",
    "EncodingError",
    "parse_csv",
    "read_csv",
    "tokenize_line",
    "zip_row",
    "CHOICE_FIELDS",
    "format_choice_block",
    "format_effects",
    "join_list",
    "parse_choice",
    "parse_choice_block",
    "parse_effects",
    "split_list",
    "BUILDERS",
    "build_event",
    "build_question",
    "build_summary",
    "build_tags",
    "parse_index",
    "dump_records",
    "write_records",
    "write_text_atomic",
    "CONVERT_ORDER",
    "build_records",
    "convert_all",
    "convert_kind",
]
