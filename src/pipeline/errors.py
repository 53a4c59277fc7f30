# -*- coding: utf-8 -*-
"""转换阶段的异常：CSV 行无法解析、单元格内紧凑编码非法。"""
from pathlib import Path
from typing import Optional, Union


class ContentPipelineError(Exception):
    """内容流水线异常基类。"""


class EncodingError(ContentPipelineError):
    """单元格内紧凑编码（效果、选项块）非法，如未知效果键、选项字段过多。"""


class CsvParseError(ContentPipelineError):
    """CSV 行无法解析；携带文件、行号（表头为第 1 行）与原始行文本。"""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ) -> None:
        self.path = str(path) if path is not None else None
        self.line_number = line_number
        self.line = line
        where = self.path or "<csv>"
        if line_number is not None:
            where = f"{where}:{line_number}"
        text = f"{where}: {message}"
        if line is not None:
            text = f"{text}\n    {line}"
        super().__init__(text)
