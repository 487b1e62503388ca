"""
Unit tests for mount extraction.
"""

from sbct.normalize.mounts import extract_mount, has_mount, parse_mount


class TestExtractMount:
    """Pulling a mount out of its rider's parenthetical."""

    def test_mount_with_stats(self):
        """The rider phrase and the mount's stats both leave the host text."""
        cleaned, mount = extract_mount(
            "HP 40, AC 18. He rides a heavy war horse (HP 30, AC 19, 2 hooves 1d6)."
        )

        assert cleaned == "HP 40, AC 18."
        assert mount.name == "heavy war horse"
        assert mount.hp == "30"
        assert mount.ac == "19"
        assert mount.attacks == "2 hooves 1d6"
        assert mount.disposition == "neutral"

    def test_mount_without_stats(self):
        """Only the rider phrase is removed."""
        cleaned, mount = extract_mount("AC 12. He rides a pony.")

        assert cleaned == "AC 12."
        assert mount.name == "pony"
        assert mount.hp is None
        assert mount.has_stats()  # disposition defaults to neutral

    def test_no_mount(self):
        """Text without a mount comes back unchanged."""
        assert extract_mount("HP 5") == ("HP 5", None)
        assert not has_mount("HP 5")

    def test_mount_word_in_item_name(self):
        """A mount word with no riding verb and no stats stays in the text."""
        text = "HP 14, AC 13. He carries a horse bow and a dagger."
        assert has_mount(text)
        assert extract_mount(text) == (text, None)

    def test_bare_mount_with_stats(self):
        """Stats after a bare mount word still make a mount."""
        cleaned, mount = extract_mount("AC 16. Warhorse (HP 22, AC 14).")

        assert cleaned == "AC 16."
        assert mount.name == "warhorse"
        assert mount.hp == "22"


class TestParseMount:
    """Mount values from labels or prose."""

    def test_known_creature(self):
        """Articles and riding verbs are dropped."""
        mount = parse_mount("a heavy war horse")
        assert mount.name == "heavy war horse"

        mount = parse_mount("He rides a pony")
        assert mount.name == "pony"

    def test_unknown_creature_with_stats(self):
        """Unrecognized creatures keep the leading text as their name."""
        mount = parse_mount("Giant eagle (HP 20)")
        assert mount.name == "giant eagle"
        assert mount.hp == "20"

    def test_empty(self):
        """Nothing to parse, no mount."""
        assert parse_mount("") is None
        assert parse_mount("  .  ") is None
