# -*- coding: utf-8 -*-
"""
内容输出：一类内容一个 JSON 数组，缩进 2、末尾换行，顺序与 CSV 行顺序一致。
先写同目录临时文件再原子替换，中途失败不会留下截断的输出。
"""
import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, Union

from pydantic import BaseModel

from src.content.models import dump_record


def dump_records(records: Iterable[BaseModel]) -> str:
    """序列化为最终文本；同样的输入总是得到逐字节相同的输出。"""
    return json.dumps([dump_record(r) for r in records], indent=2, ensure_ascii=False) + "\n"


def _output_mode(target: Path) -> int:
    """沿用已有文件的权限；新文件按当前 umask 取默认权限（mkstemp 固定为 0600）。"""
    if target.is_file():
        return stat.S_IMODE(target.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_text_atomic(path: Union[str, Path], text: str) -> Path:
    """写入临时文件后 os.replace 到目标路径（覆盖已有文件）。"""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    mode = _output_mode(target)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return target


def write_records(records: Iterable[BaseModel], path: Union[str, Path]) -> Path:
    return write_text_atomic(path, dump_records(records))
