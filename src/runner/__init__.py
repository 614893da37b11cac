"""Batch page object compilation: configuration, runner and CLI."""

from .config import RunnerConfig
from .engine import CompileResult, CompileSummary, TranslatorRunner

__all__ = ["CompileResult", "CompileSummary", "RunnerConfig", "TranslatorRunner"]
