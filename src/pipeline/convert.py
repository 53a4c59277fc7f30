# -*- coding: utf-8 -*-
"""
转换入口：CSV -> 记录 -> JSON，一类内容读一个文件、写一个文件。
任何解析失败都在写出之前抛出，不产生部分输出。
"""
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

from src.utils import get_logger
from src.utils.config import CONTENT_FILES, output_path, source_path

from .builders import BUILDERS
from .emitter import write_records
from .errors import CsvParseError, EncodingError
from .reader import read_csv

# convert 子命令的执行顺序
CONVERT_ORDER = ("questions", "events", "summaries")


def build_records(kind: str, src: Path) -> List[BaseModel]:
    """读取并构建某类内容的全部记录；单元格编码错误转为带行号的 CsvParseError。"""
    if kind not in BUILDERS:
        raise ValueError(f"未知内容类型: {kind}（可选: {', '.join(CONTENT_FILES)}）")
    build = BUILDERS[kind]
    _, rows = read_csv(src)
    records = []
    for line_number, row in rows:
        try:
            records.append(build(row))
        except EncodingError as e:
            raise CsvParseError(str(e), path=src, line_number=line_number) from e
    return records


def convert_kind(
    kind: str,
    src_dir: Optional[Path] = None,
    out_dir: Optional[Path] = None,
) -> Tuple[int, Path]:
    """
    转换一类内容。
    :return: (记录数, 输出路径)
    """
    src = source_path(kind, src_dir)
    out = output_path(kind, out_dir)
    records = build_records(kind, src)
    write_records(records, out)
    get_logger().info("Wrote %s %s to %s", len(records), kind, out)
    return len(records), out


def convert_all(src_dir: Optional[Path] = None, out_dir: Optional[Path] = None) -> Dict[str, Tuple[int, Path]]:
    """依次转换题目、事件、地点小结；遇错即停。"""
    return {kind: convert_kind(kind, src_dir, out_dir) for kind in CONVERT_ORDER}
