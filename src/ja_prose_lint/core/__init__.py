"""Core modules for Japanese prose linting."""
from .linter import RuleEngine, Diagnostic, Document, LintResult, Severity
from .position import TextSpan, Snippet, resolve_span, select_span, extract_context
from .filtering import (
    RuleConfiguration,
    RuleSetting,
    SeverityFilter,
    filter_diagnostics,
    filter_result,
)
from .pipeline import (
    LintPipeline,
    LocalEngineBackend,
    WorkerEngineBackend,
    LintPipelineError,
    PipelineInitializationError,
    TransportError,
)

__all__ = [
    "RuleEngine",
    "Diagnostic",
    "Document",
    "LintResult",
    "Severity",
    "TextSpan",
    "Snippet",
    "resolve_span",
    "select_span",
    "extract_context",
    "RuleConfiguration",
    "RuleSetting",
    "SeverityFilter",
    "filter_diagnostics",
    "filter_result",
    "LintPipeline",
    "LocalEngineBackend",
    "WorkerEngineBackend",
    "LintPipelineError",
    "PipelineInitializationError",
    "TransportError",
]
