from pathlib import Path

from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine, Session
from .settings import settings

url = make_url(settings.DATABASE_URL)

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False} if url.get_backend_name() == "sqlite" else {}

engine = create_engine(url, connect_args=connect_args)

def create_db_and_tables(bind=None):
    bind = bind or engine
    if bind.url.get_backend_name() == "sqlite" and bind.url.database not in (None, "", ":memory:"):
        Path(bind.url.database).parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(bind)

def get_session():
    with Session(engine) as session:
        yield session
