# -*- coding: utf-8 -*-
"""
按行读取 CSV：表头 + 数据行，每条记录占一行（不支持引号内换行）。
引号内的逗号按字段内容处理；空单元格保留列位置；空白行跳过。
行与表头按位置对齐成 字段名 -> 原始字符串，多余/缺失的单元格不在此校验。
"""
import csv
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from src.utils import get_logger

from .errors import CsvParseError

CsvRow = Dict[str, Optional[str]]


def tokenize_line(line: str, line_number: Optional[int] = None, source: Optional[str] = None) -> List[str]:
    """
    将一行拆成单元格列表，去掉包裹字段的双引号。
    未闭合的引号、闭合引号后紧跟其他字符等视为解析失败。
    """
    try:
        rows = list(csv.reader([line], strict=True))
    except csv.Error as e:
        raise CsvParseError(f"无法解析的 CSV 行（{e}）", path=source, line_number=line_number, line=line) from e
    if not rows:
        raise CsvParseError("空行无法解析", path=source, line_number=line_number, line=line)
    return rows[0]


def zip_row(headers: List[str], cells: List[str]) -> CsvRow:
    """按位置对齐；单元格不足的字段为 None，多余单元格丢弃。"""
    return {h: (cells[i] if i < len(cells) else None) for i, h in enumerate(headers)}


def parse_csv(text: str, source: Optional[str] = None) -> Tuple[List[str], List[Tuple[int, CsvRow]]]:
    """
    解析整段 CSV 文本。
    :return: (表头字段名列表, [(行号, 行映射), ...])，行号从 1 开始且表头为第 1 行。
    """
    lines = text.rstrip().splitlines()
    if not lines or not lines[0].strip():
        raise CsvParseError("缺少表头行", path=source, line_number=1)
    headers = [h.strip() for h in tokenize_line(lines[0], 1, source)]

    log = get_logger()
    rows: List[Tuple[int, CsvRow]] = []
    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        cells = tokenize_line(line, line_number, source)
        if len(cells) != len(headers):
            log.debug("%s:%s 单元格数 %s 与表头 %s 不一致", source or "<csv>", line_number, len(cells), len(headers))
        rows.append((line_number, zip_row(headers, cells)))
    return headers, rows


def read_csv(path: Union[str, Path]) -> Tuple[List[str], List[Tuple[int, CsvRow]]]:
    """读取 CSV 文件（UTF-8，可带 BOM）。"""
    p = Path(path)
    return parse_csv(p.read_text(encoding="utf-8-sig"), source=str(p))
