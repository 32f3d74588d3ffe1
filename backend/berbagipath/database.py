from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os
import uuid

# Use DATABASE_URL env var. Default to sqlite file in repo root for dev.
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./berbagipath.db')

# If using sqlite file, ensure check_same_thread option
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith('sqlite') else {}

# create engine with pool_pre_ping for reliability with some DB providers
engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def new_id() -> str:
    return str(uuid.uuid4())
