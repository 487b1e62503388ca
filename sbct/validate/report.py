"""
Validation reports — plain-text summaries of processed entities.
"""

from collections import Counter

from sbct.ir.enums import Severity
from sbct.ir.schema import ProcessedEntity, ValidationResult

HEADER = "--- VALIDATION REPORT ---"

RECOMMENDATIONS = (
    "Use the auto-correction fixes to repair common formatting issues",
    "Review each entity's validation details for specific guidance",
    "For non-core or encounter-critical items, include a brief mechanical note",
    "Use disposition nouns (law/good) instead of adjectives (lawful good)",
    "Use superscripts for level numbers (e.g., 16ᵗʰ level)",
)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def _section(
    lines: list[str],
    result: ValidationResult,
    indent: str,
    labels: tuple[str, str, str],
) -> None:
    """Append the errors / warnings / info groups for one entity."""
    for severity, label in zip((Severity.ERROR, Severity.WARNING, Severity.INFO), labels):
        group = result.by_severity(severity)
        if not group:
            continue
        lines.append(f"{indent}{label} ({len(group)}):")
        for warning in group:
            lines.append(f"{indent}• {warning.category}: {warning.message}")
            if warning.suggestion and severity != Severity.INFO:
                lines.append(f"{indent}  💡 {warning.suggestion}")


def single_report(entity: ProcessedEntity) -> str:
    """Report for one entity."""
    warnings = entity.validation.warnings
    score = entity.validation.compliance_score
    if not warnings:
        return f"{HEADER}\n✅ {entity.name} is fully compliant ({score}% compliance)\nNo issues detected."

    lines = [
        HEADER,
        f"🎭 {entity.variant.value.upper()}: {entity.name}",
        f"📈 Compliance Score: {score}%",
        f"⚠️  Total Issues: {len(warnings)}",
        "",
    ]
    _section(lines, entity.validation, "", ("❌ ERRORS", "⚠️  WARNINGS", "ℹ️  INFORMATION"))
    return "\n".join(lines)


def batch_report(entities: list[ProcessedEntity]) -> str:
    """Report for a batch, with common issues and recommendations."""
    if not entities:
        return ""
    if len(entities) == 1:
        return single_report(entities[0])

    all_warnings = [w for e in entities for w in e.validation.warnings]
    errors = sum(1 for w in all_warnings if w.severity == Severity.ERROR)
    average = round(sum(e.validation.compliance_score for e in entities) / len(entities))

    if not all_warnings:
        return (
            f"{HEADER}\n✅ All {len(entities)} entities fully compliant ({average}% average compliance)\nNo issues detected."
        )

    lines = [
        HEADER,
        f"📊 Summary: {len(entities)} entities processed",
        f"📈 Average Compliance: {average}%",
        f"⚠️  Total Issues: {len(all_warnings)} ({errors} errors, {len(all_warnings) - errors} warnings)",
        "",
        "--- DETAILED ISSUES ---",
    ]
    for index, entity in enumerate(entities, start=1):
        if not entity.validation.warnings:
            continue
        lines.append("")
        lines.append(f"🎭 {index}: {entity.name}")
        lines.append(f"   Compliance: {entity.validation.compliance_score}%")
        _section(lines, entity.validation, "   ", ("❌ ERRORS", "⚠️  WARNINGS", "ℹ️  INFO"))

    lines.extend(["", "--- COMMON ISSUES ---"])
    for category, count in Counter(w.category for w in all_warnings).most_common():
        lines.append(f"• {category}: {_plural(count, 'occurrence')}")

    lines.extend(["", "--- RECOMMENDATIONS ---"])
    lines.extend(f"• {r}" for r in RECOMMENDATIONS)
    return "\n".join(lines)
