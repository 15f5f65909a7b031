"""
assignment_analyzer package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import AnalyzerConfig, config_from_dict, config_from_yaml, load_config
from .extraction import extract_text, load_document
from .models import Document, ScoreResult
from .pipeline import AnalysisOptions, analyze, analyze_document
from .report import render_text_report

__all__ = [
    "AnalyzerConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "extract_text",
    "load_document",
    "Document",
    "ScoreResult",
    "AnalysisOptions",
    "analyze",
    "analyze_document",
    "render_text_report",
]

__version__ = "0.1.0"
