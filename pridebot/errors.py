"""
pridebot.errors — Error Taxonomy
=================================

Services raise these; :mod:`pridebot.api.main` maps them to HTTP
responses.  Nothing here is retried.
"""

from __future__ import annotations


class PridebotError(Exception):
    """Base class for all Pridebot failures."""


class NotFound(PridebotError):
    """A requested profile, voter, command or command type doesn't exist (404)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadUpstream(PridebotError):
    """The notification target is missing or isn't a text channel (400)."""


class StorageError(PridebotError):
    """The database is unreachable or in an unexpected state (500)."""


class VotingRecordMissing(StorageError):
    """The singleton voting record hasn't been seeded."""

    def __init__(self) -> None:
        super().__init__("voting record not initialised; run init_db()")


class DiscordError(PridebotError):
    """A Discord API call (user fetch, channel lookup, send) failed (500)."""


class NetworkError(PridebotError):
    """An outbound HTTP call, e.g. to GitHub, failed (500)."""
