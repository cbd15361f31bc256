from cssarch.reporting.formatters import FORMATTERS, format_json, format_text
from cssarch.reporting.report import Report

__all__ = ["Report", "FORMATTERS", "format_text", "format_json"]
