from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from storefront.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    # Engine = the DB connection factory
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # handlers run in the threadpool
        connect_args["check_same_thread"] = False
    return create_engine(
        settings.database_url,
        echo=settings.db_echo,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    # SessionLocal = the session factory
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )
