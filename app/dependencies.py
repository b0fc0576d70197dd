from fastapi import Depends

from app.config import Settings, get_settings
from app.database.session import get_db


def get_history_actor(settings: Settings = Depends(get_settings)) -> str:
    return settings.HISTORY_ACTOR


__all__ = ["get_db", "get_history_actor", "get_settings"]
