"""
Unit tests for the NPC narrative composer.
"""

from sbct.compose.narrative import Fragment, FragmentKind, Voice, assemble, compose_npc, equipment_fragments
from sbct.ir.enums import CanonicalLabel, Gender
from sbct.ir.schema import MountBlock, ParsedEntity


def npc(name="Owen", **fields):
    """An entity with the given canonical fields."""
    entity = ParsedEntity(name=name)
    for label, value in fields.items():
        entity.set(CanonicalLabel[label], value)
    return entity


class TestAssemble:
    """Sentence assembly from fragments."""

    def test_sentences_and_continuations(self):
        """Continuations join the previous sentence; leads are capitalized."""
        text = assemble([
            Fragment(FragmentKind.VITAL_STATS, "this one"),
            Fragment(FragmentKind.EQUIPMENT, "he carries rope"),
            Fragment(FragmentKind.EQUIPMENT, ", and carries ten gold", continues=True),
        ])
        assert text == "This one. He carries rope, and carries ten gold."

    def test_empty(self):
        """No fragments, no text."""
        assert assemble([]) == ""


class TestVoice:
    """Pronouns and verbs."""

    def test_unit(self):
        """Units speak in the plural."""
        voice = Voice.for_entity(True)
        assert (voice.subject, voice.wear, voice.carry) == ("They", "wear", "carry")

    def test_female(self):
        """Female singular voice."""
        voice = Voice.for_entity(False, Gender.FEMALE)
        assert (voice.subject, voice.possessive, voice.carry) == ("She", "Her", "carries")


class TestComposeNpc:
    """Full NPC rendering."""

    def test_classed_vital_stats(self):
        """Level, race, and class lead the vital-stats sentence."""
        entity = npc(HP="24", AC="16", DISPOSITION="lawful good")
        entity.race, entity.class_level, entity.char_class = "human", "4", "fighter"

        assert compose_npc(entity) == (
            "**Owen** *(This 4ᵗʰ level human fighter’s vital stats are "
            "HP 24, AC 16, disposition law/good.)*"
        )

    def test_equipment_and_coins(self):
        """Coins continue the carry clause."""
        entity = npc(HP="5", EQUIPMENT="chain mail, longsword", COINS="1–6 gold in coin")

        text = compose_npc(entity)
        assert "He wears chain mail and carries longsword, and carries one to six gold in coin." in text

    def test_no_equipment_no_fragments(self):
        """Without gear or valuables there is no equipment sentence."""
        entity = npc(HP="5")
        assert equipment_fragments(entity, Voice.for_entity(False)) == []

    def test_coins_only(self):
        """Coins alone open their own carry clause."""
        entity = npc(HP="5", COINS="10 gold in coin")
        fragments = equipment_fragments(entity, Voice.for_entity(False))
        assert [f.text for f in fragments] == ["He carries ten gold in coin"]

    def test_unit(self):
        """Unit headings supply the subject noun."""
        entity = npc(name="Guards x10", HP="5", AC="12")
        entity.is_unit = True

        assert compose_npc(entity) == "**Guards x10** *(These guards’ vital stats are HP 5, AC 12.)*"

    def test_female_equipment(self):
        """Female entities get 'She'."""
        entity = npc(name="Mara", EQUIPMENT="dagger")
        entity.gender = Gender.FEMALE

        assert compose_npc(entity) == "**Mara** *(She carries dagger.)*"

    def test_spell_names_italicized(self):
        """Spell lists are italicized and joined."""
        entity = npc(name="Ilsa", SPELLS="magic missile, sleep")

        assert "He can cast the following spells: *magic missile* and *sleep*." in compose_npc(entity)

    def test_spell_tiers(self):
        """A digits-only spell value reads as spells per day."""
        entity = npc(name="Ilsa", SPELLS="2, 1")
        entity.char_class = "cleric"

        assert "the following number of cleric spells per day: 2, 1." in compose_npc(entity)

    def test_secondary_skill(self):
        """One skill is singular, several are plural."""
        assert "His secondary skill is farmer." in compose_npc(npc(SECONDARY_SKILLS="farmer"))
        assert "His secondary skills are farmer and miner." in compose_npc(npc(SECONDARY_SKILLS="farmer and miner"))

    def test_nothing_known(self):
        """Without any fields the stats are unavailable."""
        assert compose_npc(npc(name="Ghost")) == "**Ghost** *(This creature’s vital stats are unavailable.)*"

    def test_mount(self):
        """The rider gets a bridge sentence and the mount its own block."""
        entity = npc(HP="40")
        entity.mount = MountBlock(name="pony", disposition="neutral")

        text = compose_npc(entity)
        rider, mount = text.split("\n\n")
        assert rider.endswith("He rides a pony.)*")
        assert mount == "**Pony (mount)** *(This creature’s vital stats are disposition neutral.)*"
