"""
Tests for the sbct command line.
"""

import json

from sbct.cli.main import main, read_input

SILENT = ["--log-level", "silent"]


class TestConvert:
    """sbct convert."""

    def test_text_output(self, owen_text, capsys):
        """Converted text goes to stdout."""
        assert main(["convert", owen_text, *SILENT]) == 0
        out = capsys.readouterr().out
        assert out.startswith("**Owen** *(This 4ᵗʰ level human fighter’s vital stats are")

    def test_file_input_and_output(self, owen_text, tmp_path, capsys):
        """Input may be a file path and output a file."""
        source = tmp_path / "owen.txt"
        source.write_text(owen_text, encoding="utf-8")
        target = tmp_path / "out.txt"

        assert main(["convert", str(source), "-o", str(target), *SILENT]) == 0
        assert capsys.readouterr().out == ""
        assert target.read_text(encoding="utf-8").startswith("**Owen**")

    def test_json_output(self, owen_text, capsys):
        """JSON output is the full result."""
        assert main(["convert", owen_text, "--format", "json", *SILENT]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["entities"][0]["name"] == "Owen"
        assert payload["entities"][0]["validation"]["compliance_score"] == 90

    def test_report_and_fixes(self, owen_text, capsys):
        """Optional sections follow the converted text."""
        assert main(["convert", owen_text, "--report", "--fixes", *SILENT]) == 0
        out = capsys.readouterr().out
        assert "--- VALIDATION REPORT ---" in out
        assert "--- Suggested Fixes ---" in out
        assert "'4th' -> '4ᵗʰ'" in out

    def test_unknown_pipeline(self, owen_text, capsys):
        """An unknown pipeline fails with a diagnostic."""
        assert main(["convert", owen_text, "--pipeline", "nope", *SILENT]) == 1
        assert "PIPELINE_NOT_FOUND" in capsys.readouterr().out

    def test_missing_dictionaries_dir(self, owen_text, tmp_path, capsys):
        """A missing dictionaries directory is a usage error."""
        code = main(["convert", owen_text, "--dictionaries", str(tmp_path / "missing"), *SILENT])
        assert code == 2
        assert "Dictionary directory not found" in capsys.readouterr().err

    def test_read_input_literal(self):
        """Text that is not a file is used as-is."""
        assert read_input("**Owen**\nHP: 24") == "**Owen**\nHP: 24"


class TestTemplate:
    """sbct template."""

    def test_npc(self, capsys):
        """The default template is one labelled NPC."""
        assert main(["template"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("**Character Name**\nDisposition:")

    def test_unit(self, capsys):
        """The unit template is a narrative line."""
        assert main(["template", "--unit"]) == 0
        assert capsys.readouterr().out.startswith("Men-at-Arms x10 (these")

    def test_batch(self, capsys):
        """Batch templates are numbered."""
        assert main(["template", "--batch", "2"]) == 0
        out = capsys.readouterr().out
        assert "**Character Name 1**" in out
        assert "**Character Name 2**" in out

    def test_bad_batch(self, capsys):
        """Batch size must be positive."""
        assert main(["template", "--batch", "0"]) == 2

    def test_no_command(self, capsys):
        """No subcommand prints help."""
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out
