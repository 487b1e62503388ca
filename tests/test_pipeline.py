"""
End-to-end tests for the transformation pipelines.
"""

import sbct
from sbct.core.context import TransformOptions, TransformRequest
from sbct.core.engine import Pipeline
from sbct.ir.enums import EntityVariant, FormatterMode, TransformStatus
from sbct.passes import normalize

OWEN_CONVERTED = (
    "**Owen** *(This 4ᵗʰ level human fighter’s vital stats are "
    "HP 24, AC 16, disposition law/good.)*"
)
GOBLIN_CONVERTED = (
    "**Goblin** *(This creature’s vital stats are Level 1(d6), AC 13, moves 20 ft., "
    "attacks with weapon (1d6), save category is Physical, Type: humanoid, XP: 5.)*"
)


def run(engine, text, pipeline_id=None, **options):
    request = TransformRequest(text=text, options=TransformOptions(**options))
    return engine.transform(request, pipeline_id)


class TestDefaultPipeline:
    """Conversion, validation, and fixes together."""

    def test_owen(self, engine, owen_text):
        """A labelled NPC converts and scores at least 90."""
        result = run(engine, owen_text)

        assert result.status == TransformStatus.SUCCESS
        owen = result.entities[0]
        assert owen.name == "Owen"
        assert owen.variant == EntityVariant.NPC
        assert owen.converted == OWEN_CONVERTED
        assert owen.validation.compliance_score >= 90
        assert owen.original == owen_text
        assert result.rendered_text == OWEN_CONVERTED

    def test_batch_order(self, engine, owen_text, goblin_text):
        """Entities come back in input order."""
        result = run(engine, f"{owen_text}\n\n{goblin_text}")

        assert [e.name for e in result.entities] == ["Owen", "Goblin"]
        assert [e.variant for e in result.entities] == [EntityVariant.NPC, EntityVariant.MONSTER]
        assert result.rendered_text == f"{OWEN_CONVERTED}\n\n{GOBLIN_CONVERTED}"

    def test_monster_mode_matches_default(self, engine, goblin_text):
        """Forced monster mode renders a monster exactly as auto-detection does."""
        default = run(engine, goblin_text)
        forced = run(engine, goblin_text, mode=FormatterMode.MONSTER)

        assert default.entities[0].converted == GOBLIN_CONVERTED
        assert forced.entities[0].converted == default.entities[0].converted
        assert forced.entities[0].validation.compliance_score == 100

    def test_mount_block(self, engine, aldric_text):
        """Mounts render as their own block after a blank line."""
        converted = run(engine, aldric_text).entities[0].converted

        rider, mount = converted.split("\n\n")
        assert rider.startswith("**Sir Aldric** *(This 6ᵗʰ level human knight’s vital stats are HP 40, AC 18")
        assert rider.endswith("He rides a heavy war horse.)*")
        assert mount == (
            "**Heavy War Horse (mount)** *(This creature’s vital stats are "
            "HP 30, AC 19, disposition neutral. It attacks with 2 hooves 1d6.)*"
        )

    def test_mount_word_in_equipment(self, engine):
        """A horse bow is gear, not a mount."""
        text = (
            "**Kell** (This 2nd level human ranger's vital stats are HP 14, AC 13, "
            "disposition neutral. He carries a horse bow and a dagger.)"
        )
        converted = run(engine, text).entities[0].converted

        assert "horse bow" in converted
        assert "rides" not in converted
        assert "(mount)" not in converted

    def test_unit(self, engine):
        """Unit headings speak in the plural."""
        text = (
            "Men-at-Arms x10 (these 1st level human fighters' vital stats are HP 7, AC 15, "
            "disposition neutral/good. They wear chain mail and carry longswords.)"
        )
        converted = run(engine, text).entities[0].converted

        assert converted.startswith(
            "**Men-at-Arms x10** *(These 1ˢᵗ level human fighters’ vital stats are HP 7, AC 15, disposition neutral/good."
        )
        assert "They wear chain mail and carry longswords" in converted

    def test_fixes_point_into_raw_text(self, engine):
        """Fix offsets index the text as submitted."""
        text = "**Mara**\r\nAlignment: Lawful Good\r\nHP: 10"
        result = run(engine, text, normalize_input=True)

        fix = result.fixes[0]
        assert text[fix.start:fix.end] == fix.original_text == "Alignment: Lawful Good"
        assert sbct.apply_fix(text, fix) == "**Mara**\r\nDisposition: law/good\r\nHP: 10"

    def test_no_entities(self, engine):
        """Text without stat blocks yields a warning, never an exception."""
        result = run(engine, "just some words")

        assert result.entities == []
        assert result.status == TransformStatus.PARTIAL
        assert "NO_ENTITIES" in [d.code for d in result.diagnostics]


class TestOtherPipelines:
    """parse_only, fixes_only, and engine errors."""

    def test_parse_only(self, engine, owen_text):
        """No fix suggestions."""
        result = run(engine, owen_text, "parse_only")
        assert result.fixes == []
        assert result.entities[0].converted == OWEN_CONVERTED

    def test_fixes_only(self, engine, owen_text):
        """Fixes without conversion."""
        result = run(engine, owen_text, "fixes_only")

        assert result.entities == []
        assert {f.corrected_text for f in result.fixes} >= {"law/good", "4ᵗʰ"}

    def test_pipeline_not_found(self, engine, owen_text):
        """Unknown pipelines are reported, not raised."""
        result = run(engine, owen_text, "nope")

        assert result.status == TransformStatus.ERROR
        assert [d.code for d in result.diagnostics] == ["PIPELINE_NOT_FOUND"]

    def test_pass_error(self, engine, owen_text):
        """A failing pass stops the pipeline with a diagnostic."""
        def explode(ctx):
            raise RuntimeError("boom")

        engine.register_pipeline(Pipeline(id="broken", name="Broken", passes=[normalize, explode]))
        result = run(engine, owen_text, "broken")

        assert result.status == TransformStatus.ERROR
        assert result.diagnostics[0].code == "PASS_ERROR"
        assert "boom" in result.diagnostics[0].message
        assert engine.list_pipelines() == ["default", "parse_only", "fixes_only", "broken"]


class TestPublicApi:
    """Top-level helpers."""

    def test_process(self, owen_text):
        """process returns the entity list."""
        entities = sbct.process(owen_text)
        assert [e.converted for e in entities] == [OWEN_CONVERTED]

    def test_process_never_raises(self):
        """Garbage in, empty list out."""
        assert sbct.process("((((") == []
        assert sbct.process("") == []

    def test_transform_with_dictionaries(self, spell_dictionaries):
        """Injected dictionaries drive spell suggestions."""
        result = sbct.transform(
            "**Ilsa**\nHP: 9\nSpells: sleep",
            dictionaries=spell_dictionaries,
            enable_dictionary_suggestions=True,
        )
        assert "*sleep*" in {f.corrected_text for f in result.fixes}
