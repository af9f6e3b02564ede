"""Report renderers for analysis results."""

from report.dot import render_dot_graph
from report.json_report import ReportDocument, build_json_document, render_json_report
from report.text import render_text_report

__all__ = [
    "ReportDocument",
    "build_json_document",
    "render_dot_graph",
    "render_json_report",
    "render_text_report",
]
