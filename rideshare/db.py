# rideshare/db.py
from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .config import settings

# ---------- Declarative Base ----------
class Base(DeclarativeBase):
    pass

# ---------- Engine / Session ----------
DATABASE_URL = settings.DATABASE_URL

# Поддержка SQLite и PostgreSQL
if DATABASE_URL and DATABASE_URL.startswith("sqlite"):
    # check_same_thread=False: сессии живут в потоках пула FastAPI
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False, "timeout": 30},
        pool_pre_ping=True,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def _sqlite_fk_on(dbapi_connection, connection_record):
        # без этого ON DELETE CASCADE в sqlite не работает
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        future=True,
    )

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)


def init_db() -> None:
    # Импорт моделей, чтобы create_all увидел все таблицы.
    # В проде схему ведёт alembic, это для разработки и тестов.
    from .models import user, car, ride, booking  # noqa: F401
    Base.metadata.create_all(bind=engine)

# ---------- Dependency ----------
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
