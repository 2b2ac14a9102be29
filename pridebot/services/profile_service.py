"""
pridebot.services.profile_service — Profile Lookups
====================================================
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from pridebot.database.models import Profile


def get_profile(session: Session, user_id: str) -> dict | None:
    """Return the public profile for *user_id*, or None if there isn't one."""
    profile = session.get(Profile, user_id)
    if profile is None:
        return None
    return profile.to_dict()
