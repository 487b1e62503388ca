"""
Engine — Pipeline orchestration.

The engine selects a pipeline, runs passes in order,
records pass failures as diagnostics, and packages output.

The engine is NOT where domain logic lives.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from sbct.core.context import TransformContext, TransformOptions, TransformRequest
from sbct.ir.enums import FormatterMode
from sbct.ir.schema import ProcessedEntity, TransformResult, TransformStatus

if TYPE_CHECKING:
    from sbct.dictionaries.models import Dictionaries


PassFn = Callable[[TransformContext], TransformContext]


@dataclass
class Pipeline:
    """A named sequence of passes."""

    id: str
    name: str
    passes: list[PassFn]


class Engine:
    """
    Pipeline orchestrator.

    Runs passes in order, handles errors, and packages results.
    """

    def __init__(self) -> None:
        self._pipelines: dict[str, Pipeline] = {}

    def register_pipeline(self, pipeline: Pipeline) -> None:
        """Register a pipeline by ID."""
        self._pipelines[pipeline.id] = pipeline

    def list_pipelines(self) -> list[str]:
        """List registered pipeline IDs."""
        return list(self._pipelines.keys())

    def transform(
        self,
        request: TransformRequest,
        pipeline_id: Optional[str] = None,
    ) -> TransformResult:
        """
        Run a transformation.

        Args:
            request: The transformation request
            pipeline_id: Which pipeline to use (default: 'default')

        Returns:
            TransformResult with entities, fixes, trace, and diagnostics
        """
        pipeline_id = pipeline_id or "default"

        if pipeline_id not in self._pipelines:
            ctx = TransformContext.from_request(request)
            ctx.status = TransformStatus.ERROR
            ctx.add_diagnostic(
                level="error",
                code="PIPELINE_NOT_FOUND",
                message=f"Pipeline '{pipeline_id}' not registered",
                source="engine",
            )
            return ctx.to_result()

        pipeline = self._pipelines[pipeline_id]
        ctx = TransformContext.from_request(request)

        from sbct.core.logging import TransformLogger
        tlog = TransformLogger(request.request_id)

        for pass_fn in pipeline.passes:
            pass_name = pass_fn.__name__
            try:
                tlog.pass_start(pass_name)
                ctx = pass_fn(ctx)
                tlog.pass_end(pass_name)
            except Exception as e:
                tlog.pass_error(pass_name, e)
                ctx.status = TransformStatus.ERROR
                ctx.add_diagnostic(
                    level="error",
                    code="PASS_ERROR",
                    message=f"Pass '{pass_name}' failed: {e}",
                    source="engine",
                )
                ctx.add_trace(
                    pass_name=pass_name,
                    action="error",
                )
                break

        tlog.transform_complete(
            status=ctx.status.value,
            blocks=len(ctx.blocks),
            entities=len(ctx.processed),
            fixes=len(ctx.fixes),
            diagnostics=len(ctx.diagnostics),
        )

        return ctx.to_result()


_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get or create the global engine instance with the stock pipelines."""
    global _engine
    if _engine is None:
        from sbct.core.pipelines import setup_default_pipeline

        _engine = Engine()
        setup_default_pipeline(_engine)
    return _engine


def transform(
    text: str,
    pipeline_id: Optional[str] = None,
    *,
    mode: FormatterMode = FormatterMode.ENHANCED,
    normalize_input: bool = False,
    dictionaries: Optional["Dictionaries"] = None,
    enable_dictionary_suggestions: bool = False,
) -> TransformResult:
    """
    Convenience function for simple transformations.

    Args:
        text: Raw stat-block text (one or many entities)
        pipeline_id: Which pipeline to use

    Returns:
        TransformResult
    """
    engine = get_engine()
    request = TransformRequest(
        text=text,
        options=TransformOptions(
            mode=mode,
            normalize_input=normalize_input,
            enable_dictionary_suggestions=enable_dictionary_suggestions,
        ),
        dictionaries=dictionaries,
    )
    return engine.transform(request, pipeline_id)


def process(
    text: str,
    *,
    mode: FormatterMode = FormatterMode.ENHANCED,
    normalize_input: bool = False,
    dictionaries: Optional["Dictionaries"] = None,
    enable_dictionary_suggestions: bool = False,
) -> list[ProcessedEntity]:
    """
    Convert raw text into one ProcessedEntity per recognized block.

    Never raises on malformed input; an unparseable input yields [].
    """
    result = transform(
        text,
        mode=mode,
        normalize_input=normalize_input,
        dictionaries=dictionaries,
        enable_dictionary_suggestions=enable_dictionary_suggestions,
    )
    return list(result.entities)
