"""
Pridebot — Discord Community Bot & Public API
==============================================
A Discord bot for LGBTQIA+ communities with an attached HTTP API that
exposes bot statistics, user profiles and voting records, and receives
vote webhooks from bot-listing sites and GitHub repository events.

Package layout::

    pridebot/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Colors, vote sites, GitHub repositories
    ├── errors.py          # Error taxonomy mapped to HTTP responses
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   ├── models.py      # ORM models (votes, usage, profiles)
    │   └── seed.py        # Singleton voting record seeder
    ├── bot/
    │   ├── core.py        # Bot subclass, command loader, API startup
    │   ├── gateway.py     # Snapshot interface over the live client
    │   ├── translations.py # Per-locale command text bundles
    │   └── commands/      # <type>/<name>.py slash-command extensions
    ├── services/
    │   ├── voting_service.py  # Atomic vote aggregation
    │   ├── usage_service.py   # Command usage counters
    │   ├── profile_service.py # Profile lookups
    │   ├── registry.py        # Command registry scanned at startup
    │   ├── github_service.py  # Commit counts from the GitHub API
    │   ├── embeds.py          # Discord embed builders
    │   └── notifier.py        # Webhook → Discord channel delivery
    └── api/
        ├── main.py        # FastAPI app
        ├── deps.py        # Dependency injection
        └── routes/        # Public stats + webhook endpoints
"""

__version__ = "0.1.0"
