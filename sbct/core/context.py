"""
TransformContext — Mutable state passed between pipeline passes.

Each pass reads prior artifacts and mutates only its allowed fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
from uuid import uuid4

from sbct.ir.enums import FormatterMode
from sbct.ir.schema import (
    CorrectionFix,
    Diagnostic,
    ParsedEntity,
    ProcessedEntity,
    RawBlock,
    TraceEntry,
    TransformResult,
    TransformStatus,
    ValidationResult,
)

if TYPE_CHECKING:
    from sbct.dictionaries.models import Dictionaries


@dataclass
class TransformOptions:
    """Per-request switches."""

    mode: FormatterMode = FormatterMode.ENHANCED
    normalize_input: bool = False
    enable_dictionary_suggestions: bool = False

    def __post_init__(self) -> None:
        self.mode = FormatterMode(self.mode)


@dataclass
class TransformRequest:
    """Input to the transformation pipeline."""

    text: str
    request_id: Optional[str] = None
    options: TransformOptions = field(default_factory=TransformOptions)
    dictionaries: Optional["Dictionaries"] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.request_id is None:
            self.request_id = str(uuid4())


@dataclass
class TransformContext:
    """
    Mutable context passed through pipeline passes.

    Each pass may read all fields but should only mutate
    the fields it is responsible for. `entities`, `validations`
    and `converted` stay index-aligned.
    """

    # Input
    request: TransformRequest
    raw_text: str
    normalized_text: str = ""
    parse_text: str = ""   # normalized_text, optionally pre-corrected

    # Pipeline artifacts
    blocks: list[RawBlock] = field(default_factory=list)
    entities: list[ParsedEntity] = field(default_factory=list)
    validations: list[ValidationResult] = field(default_factory=list)
    converted: list[str] = field(default_factory=list)
    processed: list[ProcessedEntity] = field(default_factory=list)
    fixes: list[CorrectionFix] = field(default_factory=list)

    # Trace and diagnostics
    trace: list[TraceEntry] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    # Output
    rendered_text: Optional[str] = None
    status: TransformStatus = TransformStatus.SUCCESS

    # Internal
    start_time: datetime = field(default_factory=datetime.now)

    @property
    def options(self) -> TransformOptions:
        return self.request.options

    @property
    def dictionaries(self) -> "Dictionaries":
        """Request dictionaries, or the packaged defaults."""
        if self.request.dictionaries is not None:
            return self.request.dictionaries
        from sbct.dictionaries.loader import default_dictionaries

        return default_dictionaries()

    @property
    def working_text(self) -> str:
        """The text parsing passes should read."""
        return self.parse_text or self.normalized_text or self.raw_text

    @classmethod
    def from_request(cls, request: TransformRequest) -> "TransformContext":
        """Create a context from a transform request."""
        return cls(
            request=request,
            raw_text=request.text,
        )

    def add_trace(self, pass_name: str, action: str, **kwargs: Any) -> None:
        """Add a trace entry."""
        self.trace.append(
            TraceEntry(
                id=str(uuid4()),
                timestamp=datetime.now(),
                pass_name=pass_name,
                action=action,
                before=kwargs.get("before"),
                after=kwargs.get("after"),
                affected_ids=kwargs.get("affected_ids", []),
            )
        )

    def add_diagnostic(
        self,
        level: str,
        code: str,
        message: str,
        source: str,
        affected_ids: Optional[list[str]] = None,
    ) -> None:
        """Add a diagnostic message."""
        from sbct.ir.enums import DiagnosticLevel

        self.diagnostics.append(
            Diagnostic(
                id=str(uuid4()),
                level=DiagnosticLevel(level),
                code=code,
                message=message,
                source=source,
                affected_ids=affected_ids or [],
            )
        )

    def to_result(self) -> TransformResult:
        """Convert context to final TransformResult."""
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        return TransformResult(
            request_id=self.request.request_id or str(uuid4()),
            timestamp=self.start_time,
            processing_duration_ms=duration_ms,
            entities=self.processed,
            fixes=self.fixes,
            trace=self.trace,
            diagnostics=self.diagnostics,
            rendered_text=self.rendered_text,
            status=self.status,
        )
