# -*- coding: utf-8 -*-
"""

用法示例：
  # 转换：content-src/*.csv -> data/content/*.json（单类或全部）
  python main.py convert-questions
  python main.py convert-events --src-dir content-src --out-dir data/content
  python main.py convert

  # 校验：id 唯一、引用完整、结构约束、NGSS / EP&C 标签覆盖
  python main.py validate
  python main.py validate --locations data/locations.json

  # 一键：全部转换后立即校验
  python main.py check

退出码：0 成功；1 转换失败或校验发现错误。错误列表写 stderr，告警列表写 stdout。
"""
import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()


def _path_or_none(value):
    return Path(value) if (value and str(value).strip()) else None


def _convert(kinds, args) -> int:
    from src.pipeline import ContentPipelineError, convert_kind
    from src.utils import get_logger

    log = get_logger()
    src_dir = _path_or_none(getattr(args, "src_dir", ""))
    out_dir = _path_or_none(getattr(args, "out_dir", ""))
    for kind in kinds:
        try:
            convert_kind(kind, src_dir, out_dir)
        except ContentPipelineError as e:
            log.error("转换 %s 失败: %s", kind, e)
            return 1
        except OSError as e:
            log.error("转换 %s 失败（文件读写）: %s", kind, e)
            return 1
    return 0


def cmd_convert_kind(args) -> int:
    """转换单类内容：questions / events / summaries。"""
    return _convert([args.kind], args)


def cmd_convert(args) -> int:
    """依次转换题目、事件、地点小结，遇错即停。"""
    from src.pipeline import CONVERT_ORDER
    return _convert(CONVERT_ORDER, args)


def cmd_validate(args) -> int:
    """加载输出的 JSON 与地点登记表，完整跑一遍校验后统一报告。"""
    from src.validator import print_report, validate_documents

    report = validate_documents(
        out_dir=_path_or_none(getattr(args, "out_dir", "")),
        locations_path=_path_or_none(getattr(args, "locations", "")),
    )
    print_report(report)
    return report.exit_code


def cmd_check(args) -> int:
    """转换全部内容后校验；转换失败时不再校验。"""
    code = cmd_convert(args)
    if code != 0:
        return code
    return cmd_validate(args)


def _add_path_args(p, src=True, out=True, locations=False):
    if src:
        p.add_argument("--src-dir", default="", help="CSV 源目录，默认 content-src（或 ECOTRAIL_CONTENT_SRC）")
    if out:
        p.add_argument("--out-dir", default="", help="JSON 输出目录，默认 data/content（或 ECOTRAIL_CONTENT_OUT）")
    if locations:
        p.add_argument("--locations", default="", help="地点登记表 JSON，默认 data/locations.json（或 ECOTRAIL_LOCATIONS）")
    p.add_argument("-v", "--verbose", action="store_true", help="输出 DEBUG 日志")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="EcoTrail content: CSV → JSON 转换与跨内容校验")
    sub = parser.add_subparsers(dest="command", required=True)

    for kind in ("questions", "events", "summaries"):
        p_kind = sub.add_parser(f"convert-{kind}", help=f"content-src/{kind}.csv → {kind}.json")
        _add_path_args(p_kind)
        p_kind.set_defaults(func=cmd_convert_kind, kind=kind)

    p_convert = sub.add_parser("convert", help="转换全部内容（questions → events → summaries）")
    _add_path_args(p_convert)
    p_convert.set_defaults(func=cmd_convert)

    p_validate = sub.add_parser("validate", help="校验已输出的 JSON：id、引用、结构与标签覆盖")
    _add_path_args(p_validate, src=False, locations=True)
    p_validate.set_defaults(func=cmd_validate)

    p_check = sub.add_parser("check", help="convert + validate")
    _add_path_args(p_check, locations=True)
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "verbose", False):
        from src.utils import get_logger
        get_logger(level="DEBUG")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
