"""
Auto-correction engine — run detectors, resolve overlaps, apply fixes.

Fixes are anchored by offsets into the scanned text. Applying a fix
checks the anchor first and only falls back to searching when the text
has moved underneath it.
"""

from dataclasses import dataclass
from typing import Optional

from sbct.core.logging import LogChannel, get_logger
from sbct.correct.detectors import DETECTORS, Scan
from sbct.dictionaries.models import Dictionaries
from sbct.ir.enums import Confidence
from sbct.ir.schema import CorrectionFix

log = get_logger(LogChannel.CORRECT)


@dataclass
class CorrectionOptions:
    """Switches for fix generation."""

    enable_dictionary_suggestions: bool = False


def _overlaps(a: CorrectionFix, b: CorrectionFix) -> bool:
    return a.start < b.end and b.start < a.end


def generate_fixes(
    text: str,
    options: Optional[CorrectionOptions] = None,
    dictionaries: Optional[Dictionaries] = None,
) -> list[CorrectionFix]:
    """
    Scan text and return non-overlapping fixes, most confident first.

    Duplicate proposals collapse. When two fixes overlap the higher
    confidence wins, then the detector that runs first.
    """
    options = options or CorrectionOptions()
    if dictionaries is None:
        from sbct.dictionaries.loader import default_dictionaries
        dictionaries = default_dictionaries()
    scan = Scan(dictionaries=dictionaries, enable_dictionary_suggestions=options.enable_dictionary_suggestions)

    proposals: list[tuple[int, CorrectionFix]] = []
    seen: set[tuple[str, str, int]] = set()
    for order, detector in enumerate(DETECTORS):
        for fix in detector(text, scan):
            key = (fix.original_text, fix.corrected_text, fix.start)
            if key in seen or fix.original_text == fix.corrected_text:
                continue
            seen.add(key)
            proposals.append((order, fix))

    proposals.sort(key=lambda p: (p[1].confidence.rank, p[0], p[1].start))
    accepted: list[CorrectionFix] = []
    for _, fix in proposals:
        if any(_overlaps(fix, kept) for kept in accepted):
            continue
        accepted.append(fix)

    accepted.sort(key=lambda f: (f.confidence.rank, f.start))
    log.verbose("fixes_generated", proposed=len(proposals), accepted=len(accepted))
    return accepted


def apply_fix(text: str, fix: CorrectionFix) -> str:
    """
    Apply one fix. Never raises.

    Replaces text[start:end] when it still holds original_text, otherwise
    the first occurrence of original_text. Unmatched fixes change nothing.
    """
    if text[fix.start:fix.end] == fix.original_text:
        return text[:fix.start] + fix.corrected_text + text[fix.end:]

    index = text.find(fix.original_text) if fix.original_text else -1
    if index < 0:
        log.debug("fix_not_applied", fix_id=fix.id)
        return text
    return text[:index] + fix.corrected_text + text[index + len(fix.original_text):]


def apply_fixes(text: str, fixes: list[CorrectionFix]) -> str:
    """Apply fixes right to left so earlier offsets stay valid. Overlaps are skipped."""
    result = text
    boundary = len(text) + 1
    for fix in sorted(fixes, key=lambda f: (f.start, f.end), reverse=True):
        if fix.end > boundary:
            continue
        result = apply_fix(result, fix)
        boundary = fix.start
    return result


def apply_all_high_confidence_fixes(
    text: str,
    options: Optional[CorrectionOptions] = None,
    dictionaries: Optional[Dictionaries] = None,
) -> str:
    """Pre-parse normalization: every high-confidence fix, applied."""
    fixes = [
        f for f in generate_fixes(text, options, dictionaries)
        if f.confidence == Confidence.HIGH
    ]
    return apply_fixes(text, fixes)
