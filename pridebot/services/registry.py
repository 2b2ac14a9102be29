"""
pridebot.services.registry — Command Registry
==============================================

Slash commands live under ``pridebot/bot/commands/<type>/<name>.py``.
The directory tree is scanned **once** at startup into a
:class:`CommandRegistry`; the bot loads its extensions from it and the
API answers ``/api/commands`` from it without touching the filesystem
per request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

COMMANDS_PACKAGE = "pridebot.bot.commands"
COMMANDS_ROOT = Path(__file__).resolve().parent.parent / "bot" / "commands"


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """One slash-command module."""
    type: str
    name: str
    module: str  # dotted path passed to ``bot.load_extension``


def _is_public(path: Path) -> bool:
    return not path.name.startswith(("_", "."))


@dataclass
class CommandRegistry:
    """Command descriptors grouped by command type."""

    _by_type: dict[str, list[CommandDescriptor]] = field(default_factory=dict)

    @classmethod
    def scan(
        cls,
        root: str | Path = COMMANDS_ROOT,
        package: str = COMMANDS_PACKAGE,
    ) -> CommandRegistry:
        """Build a registry from the ``<type>/<name>.py`` layout under *root*.

        Subdirectories become command types; ``*.py`` files inside them
        become commands.  Names starting with ``_`` or ``.`` are skipped.
        A missing *root* yields an empty registry.
        """
        root = Path(root)
        registry = cls()
        if not root.is_dir():
            logger.warning("Commands root %s not found — registry is empty", root)
            return registry

        for type_dir in sorted(p for p in root.iterdir() if p.is_dir() and _is_public(p)):
            registry._by_type[type_dir.name] = [
                CommandDescriptor(
                    type=type_dir.name,
                    name=f.stem,
                    module=f"{package}.{type_dir.name}.{f.stem}",
                )
                for f in sorted(type_dir.glob("*.py"))
                if _is_public(f)
            ]

        logger.info(
            "Command registry: %d commands across %d types",
            sum(len(c) for c in registry._by_type.values()),
            len(registry._by_type),
        )
        return registry

    def types(self) -> dict[str, list[str]]:
        """Command names keyed by command type."""
        return {t: [c.name for c in cmds] for t, cmds in self._by_type.items()}

    def commands(self, command_type: str) -> list[str] | None:
        """Command names under *command_type*, or None if the type doesn't exist."""
        cmds = self._by_type.get(command_type)
        if cmds is None:
            return None
        return [c.name for c in cmds]

    def get(self, command_type: str, name: str) -> CommandDescriptor | None:
        for cmd in self._by_type.get(command_type, []):
            if cmd.name == name:
                return cmd
        return None

    def extensions(self) -> list[str]:
        """Every command module path, in type then name order."""
        return [c.module for cmds in self._by_type.values() for c in cmds]
