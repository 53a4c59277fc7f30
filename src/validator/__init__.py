# -*- coding: utf-8 -*-
"""跨内容校验：id 唯一、引用完整、结构约束与 NGSS / EP&C 标签覆盖。"""
from .registry import LocationRegistry, load_location_registry, parse_location_registry
from .report import (
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    ValidationIssue,
    ValidationReport,
    print_report,
)
from .content_check import (
    ContentValidator,
    LocationAggregate,
    required_epc_questions,
    validate_content,
)
from .documents import load_collection, validate_documents

__all__ = [
    "LocationRegistry",
    "load_location_registry",
    "parse_location_registry",
    "SEVERITY_ERROR",
    "SEVERITY_WARNING",
    "ValidationIssue",
    "ValidationReport",
    "print_report",
    "ContentValidator",
    "LocationAggregate",
    "required_epc_questions",
    "validate_content",
    "load_collection",
    "validate_documents",
]
