# -*- coding: utf-8 -*-
"""校验结果：错误（阻断）与告警（不阻断）分开收集，全部跑完后统一输出。"""
import sys
from typing import List, Optional, TextIO

from pydantic import BaseModel, Field

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


class ValidationIssue(BaseModel):
    """单条校验发现。"""
    severity: str = Field(..., description="error / warning")
    code: str = Field(..., description="如 duplicate-id / dangling-reference / epc-coverage")
    message: str = Field(default="")
    subject: Optional[str] = Field(default=None, description="相关的记录 id 或地点 id")


class ValidationReport(BaseModel):
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)

    def error(self, code: str, message: str, subject: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(severity=SEVERITY_ERROR, code=code, message=message, subject=subject))

    def warn(self, code: str, message: str, subject: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(severity=SEVERITY_WARNING, code=code, message=message, subject=subject))

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def codes(self, severity: str = SEVERITY_ERROR) -> List[str]:
        issues = self.errors if severity == SEVERITY_ERROR else self.warnings
        return [i.code for i in issues]


def print_report(report: ValidationReport, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
    """
    错误写 stderr，告警写 stdout，每项以 "- " 开头。
    失败时也照常列出告警。
    """
    out = out or sys.stdout
    err = err or sys.stderr
    if report.errors:
        print("Content validation failed:", file=err)
        for issue in report.errors:
            print(f"- {issue.message}", file=err)
    if report.warnings:
        print("Content validation warnings:", file=out)
        for issue in report.warnings:
            print(f"- {issue.message}", file=out)
    if report.passed:
        print("Content validation passed.", file=out)
