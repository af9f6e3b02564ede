"""Analysis entry points for dircycle."""

from analysis.result import AnalysisResult, AnalysisSummary
from analysis.run import analyze, analyze_directories

__all__ = ["AnalysisResult", "AnalysisSummary", "analyze", "analyze_directories"]
