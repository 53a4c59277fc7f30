# -*- coding: utf-8 -*-
"""
内容流水线配置：路径、文件名与校验常量。
路径可由环境变量（或项目根目录下的 .env）覆盖，默认指向项目内目录。
"""
import os
from pathlib import Path
from typing import Optional

# 项目根（utils 的 parents[2]）
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# ---------- 路径（可从环境变量读取） ----------
CONTENT_SRC_DIR = Path(os.getenv("ECOTRAIL_CONTENT_SRC", str(PROJECT_ROOT / "content-src")))
CONTENT_OUT_DIR = Path(os.getenv("ECOTRAIL_CONTENT_OUT", str(PROJECT_ROOT / "data" / "content")))
LOCATIONS_PATH = Path(os.getenv("ECOTRAIL_LOCATIONS", str(PROJECT_ROOT / "data" / "locations.json")))

LOG_LEVEL = os.getenv("ECOTRAIL_LOG_LEVEL", "INFO").upper()

# 内容类型 -> (源 CSV 文件名, 输出 JSON 文件名)
CONTENT_FILES = {
    "questions": ("questions.csv", "questions.json"),
    "events": ("events.csv", "events.json"),
    "summaries": ("summaries.csv", "summaries.json"),
}

# ---------- 内容约束 ----------
EFFECT_KEYS = ("health", "supplies", "biodiversity", "time")
GRADE_BANDS = ("4-5", "6-8")
DIFFICULTIES = ("easy", "medium", "hard")
EVENT_TYPES = ("hazard", "decision", "restoration")

ANSWER_COUNT = 4
MIN_EVENT_CHOICES = 2
# 每个地点至少 ceil(题目数 / 3) 道题带 EP&C 标签，否则告警
EPC_COVERAGE_DIVISOR = 3


def source_path(kind: str, src_dir: Optional[Path] = None) -> Path:
    """某类内容的源 CSV 路径。"""
    return Path(src_dir or CONTENT_SRC_DIR) / CONTENT_FILES[kind][0]


def output_path(kind: str, out_dir: Optional[Path] = None) -> Path:
    """某类内容的输出 JSON 路径（固定文件名）。"""
    return Path(out_dir or CONTENT_OUT_DIR) / CONTENT_FILES[kind][1]
