from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from linktracker_app.config import settings

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Engine for ``database_url``; SQLite connections may be shared across threads"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


engine = create_db_engine(settings.database_url)
SessionLocal = sessionmaker(autoflush=False, bind=engine)
