# salesboard/core/database.py

import math

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from salesboard.core.config import DatabaseSettings

Base = declarative_base()


def engine_options(settings: DatabaseSettings) -> dict:
    url = settings.sqlalchemy_url()
    if url.get_backend_name() == "sqlite":
        # requests are served from the thread pool
        return {"connect_args": {"check_same_thread": False}}

    options = {"pool_pre_ping": True, "pool_timeout": settings.pool_timeout}
    if url.get_backend_name() == "mysql" and url.get_driver_name() == "pymysql":
        # a single hung statement or commit is cut off by the socket timeouts
        seconds = max(1, math.ceil(settings.pool_timeout))
        options["connect_args"] = {
            "connect_timeout": seconds,
            "read_timeout": seconds,
            "write_timeout": seconds,
        }
    return options


def build_engine(settings: DatabaseSettings):
    return create_engine(settings.sqlalchemy_url(), **engine_options(settings))


def build_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
