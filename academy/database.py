from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from academy.config import DATABASE_URL
from academy.models.base_model import Base

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

__all__ = ["Base", "engine", "SessionLocal"]
