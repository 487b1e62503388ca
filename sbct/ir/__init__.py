"""
IR — Intermediate Representation

Parsed entities, validation results, fixes, and transform results.
The converted text is a rendering of a ParsedEntity.
"""

from sbct.ir.enums import (
    AttributeKind,
    CanonicalLabel,
    Confidence,
    DiagnosticLevel,
    EntityVariant,
    FormatterMode,
    Gender,
    PrimeType,
    Severity,
    TransformStatus,
)
from sbct.ir.schema import (
    IR_VERSION,
    AttributeContext,
    AttributeSummary,
    CorrectionFix,
    Diagnostic,
    MountBlock,
    ParentheticalData,
    ParsedEntity,
    ParsedTitleAndBody,
    ProcessedEntity,
    RawBlock,
    TraceEntry,
    TransformResult,
    ValidationResult,
    ValidationWarning,
)

__all__ = [
    # Enums
    "AttributeKind",
    "CanonicalLabel",
    "Confidence",
    "DiagnosticLevel",
    "EntityVariant",
    "FormatterMode",
    "Gender",
    "PrimeType",
    "Severity",
    "TransformStatus",
    # Schema
    "IR_VERSION",
    "AttributeContext",
    "AttributeSummary",
    "CorrectionFix",
    "Diagnostic",
    "MountBlock",
    "ParentheticalData",
    "ParsedEntity",
    "ParsedTitleAndBody",
    "ProcessedEntity",
    "RawBlock",
    "TraceEntry",
    "TransformResult",
    "ValidationResult",
    "ValidationWarning",
]
