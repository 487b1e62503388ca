"""
SBCT CLI — Command-line interface for stat block conversion.
"""

import argparse
import sys
from pathlib import Path

from sbct import __version__
from sbct.core.context import TransformOptions, TransformRequest
from sbct.core.engine import get_engine
from sbct.ir.enums import FormatterMode
from sbct.ir.serialization import to_json


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sbct",
        description="Stat Block Canonical Transformer",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"sbct {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert stat blocks to canonical form")
    convert_parser.add_argument(
        "input",
        type=str,
        help="Input text or path to file (use - for stdin)",
    )
    convert_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    convert_parser.add_argument(
        "--mode",
        choices=[m.value for m in FormatterMode],
        default=FormatterMode.ENHANCED.value,
        help="Extractor selection (default: enhanced)",
    )
    convert_parser.add_argument(
        "--normalize",
        action="store_true",
        help="Apply high-confidence fixes before parsing",
    )
    convert_parser.add_argument(
        "--dictionaries",
        type=str,
        default=None,
        metavar="DIR",
        help="Directory holding spells.csv, items.csv, monsters.csv, name_mappings.yaml",
    )
    convert_parser.add_argument(
        "--suggest-from-dictionaries",
        action="store_true",
        help="Let dictionary spell names produce italicization fixes",
    )
    convert_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format: text (default) or json (full TransformResult)",
    )
    convert_parser.add_argument(
        "--pipeline",
        type=str,
        default="default",
        help="Pipeline to use (default, parse_only, fixes_only)",
    )
    convert_parser.add_argument(
        "--report",
        action="store_true",
        help="Append the validation report",
    )
    convert_parser.add_argument(
        "--fixes",
        action="store_true",
        help="Append suggested fixes",
    )

    # Logging configuration
    convert_parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or SBCT_LOG_LEVEL env var)",
    )
    convert_parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (pipeline,extract,normalize,compose,validate,correct,system). Default: all",
    )

    # Template command
    template_parser = subparsers.add_parser("template", help="Print an input template")
    template_parser.add_argument(
        "--batch",
        type=int,
        default=None,
        metavar="N",
        help="Print a batch template with N entries",
    )
    template_parser.add_argument(
        "--unit",
        action="store_true",
        help="Template for a unit of soldiers instead of a single NPC",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "convert":
        return run_convert(args)
    if args.command == "template":
        return run_template(args)

    return 0


def read_input(value: str) -> str:
    """Read stdin for '-', a file when the value names one, else the value itself."""
    if value == "-":
        return sys.stdin.read()
    # Only check as path if it's short enough to be a valid path
    if len(value) < 256 and "\n" not in value and Path(value).is_file():
        return Path(value).read_text(encoding="utf-8")
    return value


def run_convert(args: argparse.Namespace) -> int:
    """Run conversion command."""
    # Configure logging first
    from sbct.core.logging import configure_logging

    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(
        level=args.log_level,
        channels=channels,
        force=True,
    )

    text = read_input(args.input)

    dictionaries = None
    if args.dictionaries:
        from sbct.dictionaries.loader import load_dictionaries_from_dir

        try:
            dictionaries = load_dictionaries_from_dir(args.dictionaries)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    request = TransformRequest(
        text=text,
        options=TransformOptions(
            mode=FormatterMode(args.mode),
            normalize_input=args.normalize,
            enable_dictionary_suggestions=args.suggest_from_dictionaries,
        ),
        dictionaries=dictionaries,
    )
    result = get_engine().transform(request, args.pipeline)

    if args.format == "json":
        output = to_json(result)
    else:
        output = format_text_output(result, report=args.report, fixes=args.fixes)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        print(output)

    return 0 if result.status.value in ("success", "partial") else 1


def format_text_output(result, report: bool = False, fixes: bool = False) -> str:
    """Converted text, then the optional report and fix sections, then diagnostics."""
    from sbct.validate.report import batch_report

    sections = [result.rendered_text or ""]

    if report and result.entities:
        sections.append(batch_report(result.entities))

    if fixes:
        lines = ["--- Suggested Fixes ---"]
        if not result.fixes:
            lines.append("No fixes suggested.")
        for fix in result.fixes:
            lines.append(
                f"[{fix.confidence.value}] {fix.description}: "
                f"'{fix.original_text}' -> '{fix.corrected_text}' (at {fix.start})"
            )
        sections.append("\n".join(lines))

    if result.diagnostics:
        lines = ["--- Diagnostics ---"]
        for diag in result.diagnostics:
            lines.append(f"[{diag.level.value}] {diag.code}: {diag.message}")
        sections.append("\n".join(lines))

    return "\n\n".join(s for s in sections if s)


def run_template(args: argparse.Namespace) -> int:
    """Print an input template."""
    from sbct.compose.templates import batch_template, npc_template

    if args.batch is not None:
        if args.batch < 1:
            print("Error: --batch must be at least 1", file=sys.stderr)
            return 2
        print(batch_template(args.batch))
    else:
        print(npc_template(unit=args.unit))
    return 0


if __name__ == "__main__":
    sys.exit(main())
