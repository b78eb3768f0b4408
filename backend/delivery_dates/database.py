# backend/delivery_dates/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from .config import settings

# Backends with INSERT ... ON CONFLICT DO UPDATE, used for the delivery counters
UPSERT_DIALECTS = ("postgresql", "sqlite")


def build_engine(url: str):
    backend = make_url(url).get_backend_name()
    if backend not in UPSERT_DIALECTS:
        raise ValueError(
            f"Unsupported database backend {backend!r}; expected one of {', '.join(UPSERT_DIALECTS)}"
        )

    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints on a threadpool
        connect_args["check_same_thread"] = False

    engine = create_engine(url, connect_args=connect_args)

    if url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def enable_sqlite_fk(dbapi_connection, _):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.resolved_database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
