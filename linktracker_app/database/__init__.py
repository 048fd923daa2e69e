from .connection import Base, SessionLocal, create_db_engine, engine

__all__ = ["Base", "SessionLocal", "create_db_engine", "engine"]
