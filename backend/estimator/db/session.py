from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from estimator import config


@lru_cache()
def get_engine() -> Engine:
    connect_args = {}
    if config.DATABASE_URL.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(config.DATABASE_URL, echo=config.SQL_ECHO, connect_args=connect_args)
