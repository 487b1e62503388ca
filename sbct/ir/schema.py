"""
IR Schema — Pydantic models for parsed and processed stat blocks.

The IR captures what was read from the input, not how it will be rendered.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sbct.ir.enums import (
    AttributeKind,
    CanonicalLabel,
    Confidence,
    DiagnosticLevel,
    EntityVariant,
    Gender,
    Severity,
    TransformStatus,
)

IR_VERSION = "0.1.0"

LabelKey = Union[CanonicalLabel, str]


def _key(label: LabelKey) -> str:
    return label.value if isinstance(label, CanonicalLabel) else str(label)


# ============================================================================
# Splitting
# ============================================================================

class RawBlock(BaseModel):
    """A slice of the input believed to describe one entity."""

    index: int = Field(..., description="Position of the block in the input")
    text: str = Field(..., description="Block text, trimmed")
    start_char: int = Field(..., description="Character offset in normalized input")
    end_char: int = Field(..., description="Character offset end")


class ParsedTitleAndBody(BaseModel):
    """Title line, body lines, and top-level parentheticals of a block."""

    title: str = ""
    body: str = ""
    parentheticals: list[str] = Field(default_factory=list)


# ============================================================================
# Extraction
# ============================================================================

class MountBlock(BaseModel):
    """A creature ridden by the host entity."""

    name: str = Field(..., description="Mount phrase, e.g. 'heavy war horse'")
    level: Optional[str] = None
    hp: Optional[str] = None
    ac: Optional[str] = None
    disposition: Optional[str] = None
    attacks: Optional[str] = None
    equipment: Optional[str] = None
    raw: str = ""

    def has_stats(self) -> bool:
        return any((self.level, self.hp, self.ac, self.disposition, self.attacks))


class ParentheticalData(BaseModel):
    """Fields read from one narrative parenthetical by the enhanced extractor."""

    hp: Optional[str] = None
    ac: Optional[str] = None
    disposition: Optional[str] = None
    race_class: Optional[str] = Field(None, description="Display form, e.g. 'human, 4ᵗʰ level fighter'")
    race: Optional[str] = None
    char_class: Optional[str] = None
    level: Optional[str] = Field(None, description="Class level, '4' or '4/5' for multiclass")
    creature_level: Optional[str] = Field(None, description="Hit-dice level, e.g. 'Level 1(d6)'")
    attributes: Optional[str] = None
    equipment: Optional[str] = None
    spells: Optional[str] = None
    mount_data: Optional[MountBlock] = None
    coins: Optional[str] = None
    jewelry: Optional[str] = None
    secondary_skills: Optional[str] = None
    significant_attributes: Optional[str] = None
    subject_phrase: Optional[str] = Field(None, description="Noun phrase from 'These X’ vital stats'")
    original_pronoun: Optional[str] = Field(None, description="this, these, or those")
    raw: str = ""


class ParsedEntity(BaseModel):
    """
    One entity read from a RawBlock.

    Field keys are always CanonicalLabel values, whatever surface label
    produced them. Use get/has/set rather than touching `fields` directly.
    """

    name: str = ""
    variant: Optional[EntityVariant] = Field(None, description="Set once by the classifier")
    fields: dict[str, str] = Field(default_factory=dict)
    notes: list[str] = Field(default_factory=list)
    original: str = ""
    is_unit: bool = False
    mount: Optional[MountBlock] = None
    parenthetical: Optional[ParentheticalData] = None

    race: Optional[str] = None
    char_class: Optional[str] = None
    class_level: Optional[str] = None
    gender: Gender = Gender.MALE
    schema_labels: list[str] = Field(
        default_factory=list,
        description="Surface labels the monster extractor read (e.g. 'Alignment')",
    )

    def get(self, label: LabelKey, default: Optional[str] = None) -> Optional[str]:
        return self.fields.get(_key(label), default)

    def has(self, label: LabelKey) -> bool:
        value = self.fields.get(_key(label))
        return bool(value and value.strip())

    def set(self, label: LabelKey, value: Optional[str], overwrite: bool = True) -> None:
        """Store a field value; empty values are ignored."""
        if value is None or not value.strip():
            return
        key = _key(label)
        if not overwrite and self.has(key):
            return
        self.fields[key] = value.strip()

    def assign_variant(self, variant: EntityVariant) -> None:
        """Record the classifier's decision. Raises if already classified."""
        if self.variant is not None and self.variant != variant:
            raise ValueError(f"Entity '{self.name}' already classified as {self.variant.value}")
        self.variant = variant


# ============================================================================
# Normalization
# ============================================================================

class AttributeContext(BaseModel):
    """What the attribute normalizer knows about the entity."""

    is_unit: bool = False
    race_class_text: Optional[str] = None
    level_text: Optional[str] = None


class AttributeSummary(BaseModel):
    """Normalized attribute designation."""

    kind: AttributeKind
    value: Optional[str] = Field(None, description="'physical'/'mental' for PRIME")
    names: list[str] = Field(default_factory=list, description="Full attribute names for LIST")


# ============================================================================
# Validation
# ============================================================================

class ValidationWarning(BaseModel):
    """A single style-guide violation."""

    severity: Severity
    category: str
    message: str
    suggestion: Optional[str] = None
    rule_id: Optional[str] = None


class ValidationResult(BaseModel):
    """Warnings and the 0-100 compliance score for one entity."""

    warnings: list[ValidationWarning] = Field(default_factory=list)
    compliance_score: int = Field(100, ge=0, le=100)

    def by_severity(self, severity: Severity) -> list[ValidationWarning]:
        return [w for w in self.warnings if w.severity == severity]


# ============================================================================
# Correction
# ============================================================================

class CorrectionFix(BaseModel):
    """An offset-anchored rewrite of the raw input."""

    id: str
    category: str
    description: str
    original_text: str
    corrected_text: str
    confidence: Confidence
    start: int = Field(..., ge=0, description="Offset of original_text in the scanned text")
    end: int = Field(..., ge=0)


# ============================================================================
# Output
# ============================================================================

class ProcessedEntity(BaseModel):
    """Final, immutable record for one block."""

    model_config = ConfigDict(frozen=True)

    name: str
    original: str
    converted: str
    validation: ValidationResult
    variant: EntityVariant


class TraceEntry(BaseModel):
    """A single transformation trace entry."""

    id: str
    timestamp: datetime
    pass_name: str
    action: str
    before: Optional[str] = None
    after: Optional[str] = None
    affected_ids: list[str] = Field(default_factory=list)


class Diagnostic(BaseModel):
    """A diagnostic message."""

    id: str
    level: DiagnosticLevel
    code: str
    message: str
    source: str
    affected_ids: list[str] = Field(default_factory=list)


class TransformResult(BaseModel):
    """The complete output of an SBCT transformation."""

    version: str = Field(default=IR_VERSION, description="IR schema version")
    request_id: str = Field(..., description="Unique transformation ID")
    timestamp: datetime = Field(..., description="When transformation occurred")

    entities: list[ProcessedEntity] = Field(default_factory=list)
    fixes: list[CorrectionFix] = Field(default_factory=list)

    # Metadata
    trace: list[TraceEntry] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    # Output
    rendered_text: Optional[str] = Field(None, description="All converted blocks, blank-line separated")
    status: TransformStatus = Field(..., description="Transformation status")
    processing_duration_ms: float = Field(
        0.0, description="Total wall-clock time for transformation"
    )
