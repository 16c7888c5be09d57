from .base import Base
from .session import create_engine, init_models, make_sessionmaker

__all__ = ["Base", "create_engine", "init_models", "make_sessionmaker"]
