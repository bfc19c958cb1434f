# src/hobbylink/scripts/seed_hobbies.py
"""Seed the starter hobby catalogue.

Safe to run repeatedly: existing hobbies are left untouched.
"""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from hobbylink.core.logging import setup_logging
from hobbylink.core.settings import settings
from hobbylink.db.session import SessionLocal, atomic
from hobbylink.models import Hobby
from hobbylink.services.provisioning import ensure_default_hobby, ensure_hobby

logger = logging.getLogger("hobbylink.scripts.seed_hobbies")

STARTER_HOBBIES: list[dict] = [
    {
        "name": "Urban Gardening",
        "description": "Growing food and flowers on balconies, rooftops and shared plots.",
        "tags": ["gardening", "outdoors", "sustainability"],
    },
    {
        "name": "Drone Photography",
        "description": "Aerial photos and video, flight planning and editing.",
        "tags": ["photography", "drones", "outdoors"],
    },
    {
        "name": "Pottery",
        "description": "Wheel throwing, hand building and glazing.",
        "tags": ["crafts", "ceramics"],
    },
    {
        "name": "Bouldering",
        "description": "Short, ropeless climbing problems indoors and on rock.",
        "tags": ["climbing", "fitness", "outdoors"],
    },
    {
        "name": "Board Games",
        "description": "Strategy, party and cooperative tabletop games.",
        "tags": ["games", "social"],
    },
    {
        "name": "Home Brewing",
        "description": "Brewing beer, cider and kombucha at home.",
        "tags": ["brewing", "food"],
    },
    {
        "name": "Astronomy",
        "description": "Stargazing, telescopes and astrophotography.",
        "tags": ["science", "night sky", "photography"],
    },
    {
        "name": "Knitting",
        "description": "Patterns, yarns and works in progress.",
        "tags": ["crafts", "textiles"],
    },
]


def seed_hobbies(db: Session, hobbies: list[dict] | None = None) -> list[Hobby]:
    """Find-or-create each catalogue hobby plus the default hobby."""
    seeded: list[Hobby] = []
    with atomic(db):
        for entry in hobbies if hobbies is not None else STARTER_HOBBIES:
            seeded.append(
                ensure_hobby(
                    db,
                    entry["name"],
                    description=entry.get("description"),
                    tags=entry.get("tags"),
                )
            )
        seeded.append(ensure_default_hobby(db))
    logger.info("Hobby catalogue seeded: %d entries", len(seeded))
    return seeded


def main() -> None:
    setup_logging(settings.log_level)
    db = SessionLocal()
    try:
        seed_hobbies(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
