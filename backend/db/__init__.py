from .session import get_db, engine, init_db, SessionLocal, Base
from . import models  # noqa: F401

__all__ = ["get_db", "engine", "init_db", "SessionLocal", "Base", "models"]
