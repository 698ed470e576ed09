"""Schema analysis exports."""

from .analysis_cache import AnalysisCache, SchemaKey
from .analysis_models import (
    AnalyzeOptions,
    ErrorCode,
    RequiredFieldsResult,
    SchemaAnalysis,
    SchemaIssue,
    SchemaWarning,
    WarningCode,
)
from .required_fields import validate_required_fields
from .schema_analyzer import SchemaAnalyzer, analyze, default_analyzer

__all__ = [
    "AnalysisCache",
    "AnalyzeOptions",
    "ErrorCode",
    "RequiredFieldsResult",
    "SchemaAnalysis",
    "SchemaAnalyzer",
    "SchemaIssue",
    "SchemaKey",
    "SchemaWarning",
    "WarningCode",
    "analyze",
    "default_analyzer",
    "validate_required_fields",
]
