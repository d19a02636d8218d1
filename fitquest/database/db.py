"""Database connection and session management."""

from contextlib import contextmanager

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from ..settings import app_home
from .models import Base, Character

# ── engine & session factory (created lazily) ─────────────────────────────

DB_FILENAME = "fitquest.db"

_engine = None
_SessionFactory = None


def _default_url() -> str:
    home = app_home()
    home.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{home / DB_FILENAME}"


def _make_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, echo=False)


def _get_engine():
    global _engine
    if _engine is None:
        _engine = _make_engine(_default_url())
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database, and by the CLI's ``--db`` flag."""
    global _engine, _SessionFactory
    _SessionFactory = None
    _engine = _make_engine(url)


def _run_migrations(engine) -> None:
    """Schema migrations for existing databases.

    Runs after ``create_all`` so new columns exist in fresh installs.
    Each migration is idempotent — safe to run repeatedly.
    """
    insp = inspect(engine)
    table_names = set(insp.get_table_names())

    with engine.connect() as conn:
        # ── M1: add public_profile column to characters ────────────────
        if "characters" in table_names:
            columns = {c["name"] for c in insp.get_columns("characters")}
            if "public_profile" not in columns:
                conn.execute(text(
                    "ALTER TABLE characters "
                    "ADD COLUMN public_profile BOOLEAN NOT NULL DEFAULT 0"
                ))

        # ── M3: unique award index on older xp_log tables ──────────────
        if "xp_log" in table_names:
            indexes = {i["name"] for i in insp.get_indexes("xp_log")}
            if "uq_xp_log_award" not in indexes:
                conn.execute(text(
                    "CREATE UNIQUE INDEX uq_xp_log_award "
                    "ON xp_log (user_id, source, reference_id)"
                ))
        conn.commit()

    # ── M2: recompute stored levels from XP ────────────────────────────
    from ..gamification.levels import level_for_xp
    factory = _get_session_factory()
    with factory() as session:
        for character in session.query(Character).all():
            level = level_for_xp(character.xp)
            if character.level != level:
                character.level = level
        session.commit()


def init_db() -> None:
    """Create all tables and run migrations."""
    engine = _get_engine()
    Base.metadata.create_all(engine)
    _run_migrations(engine)


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
