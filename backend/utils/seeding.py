import logging
from sqlmodel import Session, select
from models import Genre

logger = logging.getLogger(__name__)

DEFAULT_GENRES = [
    {"name": "Hip-Hop", "icon": "ri-album-line"},
    {"name": "Drill", "icon": "ri-disc-line"},
    {"name": "Trap", "icon": "ri-sound-module-line"},
    {"name": "Old School", "icon": "ri-record-circle-line"},
    {"name": "R&B", "icon": "ri-music-2-line"},
    {"name": "Boom Bap", "icon": "ri-rhythm-line"},
]

def seed_initial_data(session: Session) -> int:
    """Insert the default genres once. Returns the number of genres created."""
    existing = session.exec(select(Genre)).first()
    if existing:
        return 0

    logger.info("Initializing default genres...")
    for g_data in DEFAULT_GENRES:
        session.add(Genre(name=g_data["name"], icon=g_data["icon"]))
        session.commit()
    logger.info("Default genres created successfully")
    return len(DEFAULT_GENRES)
