from app.database.base import Base
from app.database.engine import build_engine, engine, init_db
from app.database.session import SessionLocal, get_db

__all__ = ["Base", "SessionLocal", "build_engine", "engine", "get_db", "init_db"]
