"""
tests/test_registry.py — Command Registry Tests
================================================
"""

from __future__ import annotations

from conftest import write_commands
from pridebot.services.registry import CommandRegistry


class TestScan:

    def test_listing_matches_files(self, registry):
        assert registry.types() == {
            "fun": ["gaydar"],
            "pride": ["genderfluid", "lesbian", "transgender"],
        }

    def test_private_entries_are_skipped(self, tmp_path):
        root = write_commands(tmp_path / "commands", {"pride": ["lesbian"], "_drafts": ["wip"]})
        (root / "pride" / "_helpers.py").write_text("")
        (root / "pride" / "notes.txt").write_text("not a command")
        (root / ".cache").mkdir()

        registry = CommandRegistry.scan(root, package="cmds")

        # __init__.py is private too
        assert registry.types() == {"pride": ["lesbian"]}

    def test_missing_root_is_empty(self, tmp_path):
        registry = CommandRegistry.scan(tmp_path / "nope")
        assert registry.types() == {}
        assert registry.extensions() == []

    def test_empty_type_is_listed(self, tmp_path):
        root = tmp_path / "commands"
        (root / "misc").mkdir(parents=True)

        registry = CommandRegistry.scan(root)

        assert registry.commands("misc") == []


class TestLookups:

    def test_commands_of_type(self, registry):
        assert registry.commands("fun") == ["gaydar"]
        assert registry.commands("nonexistent") is None

    def test_get(self, registry):
        cmd = registry.get("pride", "lesbian")
        assert cmd is not None
        assert (cmd.type, cmd.name, cmd.module) == ("pride", "lesbian", "testcommands.pride.lesbian")
        assert registry.get("pride", "gaydar") is None
        assert registry.get("nonexistent", "lesbian") is None

    def test_extensions(self, registry):
        assert registry.extensions() == [
            "testcommands.fun.gaydar",
            "testcommands.pride.genderfluid",
            "testcommands.pride.lesbian",
            "testcommands.pride.transgender",
        ]


def test_packaged_commands_include_genderfluid():
    registry = CommandRegistry.scan()
    assert "genderfluid" in registry.commands("pride")
    assert "pridebot.bot.commands.pride.genderfluid" in registry.extensions()
