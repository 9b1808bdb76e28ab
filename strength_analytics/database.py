"""
Database Configuration
Handles the connection (PostgreSQL in production) using SQLAlchemy

Tables are declared with SQLAlchemy Core; queries elsewhere are plain
text() SQL that runs on PostgreSQL and SQLite alike.
"""

import logging

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL

logger = logging.getLogger(__name__)


def _create_engine(url: str):
    # SQLite (tests, local runs) shares one in-memory connection across threads
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # - pool_pre_ping: Tests connections before using them
    # - pool_size: Number of connections to keep open
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10
    )


engine = _create_engine(DATABASE_URL)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

metadata = MetaData()

user_profiles = Table(
    "user_profiles", metadata,
    Column("user_id", String(64), primary_key=True),
    Column("gender", String(16)),
    Column("age", Integer),
    Column("weight_value", Float),
    Column("weight_unit", String(8)),
    Column("skeletal_muscle_mass_value", Float),
    Column("skeletal_muscle_mass_unit", String(8)),
    Column("height_value", Float),
    Column("height_unit", String(8)),
    Column("workouts_per_week", Integer),
)

fitness_goals = Table(
    "fitness_goals", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), ForeignKey("user_profiles.user_id"), nullable=False),
    Column("description", String(255), nullable=False),
    Column("is_primary", Boolean, nullable=False, default=False),
    Column("achieved", Boolean, nullable=False, default=False),
    Column("date_achieved", Date),
    Column("target_date", Date),
)

exercises = Table(
    "exercises", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(128), nullable=False),
    Column("normalized_name", String(128), nullable=False, unique=True),
    Column("category", String(32)),
    Column("equipment", String(64)),
)

exercise_legacy_names = Table(
    "exercise_legacy_names", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("exercise_id", Integer, ForeignKey("exercises.id"), nullable=False),
    Column("legacy_name", String(128), nullable=False),
)

workout_logs = Table(
    "workout_logs", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False),
    Column("log_date", Date, nullable=False),
    UniqueConstraint("user_id", "log_date", name="uq_workout_logs_user_date"),
)

workout_exercises = Table(
    "workout_exercises", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("workout_log_id", Integer, ForeignKey("workout_logs.id"), nullable=False),
    Column("position", Integer, nullable=False),
    Column("name", String(128), nullable=False),
    Column("category", String(32)),
    Column("sets", Integer),
    Column("reps", Integer),
    Column("weight", Float),
    Column("weight_unit", String(8)),
    Column("distance", Float),
    Column("distance_unit", String(8)),
    Column("duration", Float),
    Column("duration_unit", String(8)),
    Column("calories", Float),
)

personal_records = Table(
    "personal_records", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False),
    Column("exercise_name", String(128), nullable=False),
    Column("weight", Float, nullable=False),
    Column("weight_unit", String(8), nullable=False),
    Column("record_date", Date, nullable=False),
    Column("category", String(32)),
)


def init_db(bind=None):
    """Create any missing tables"""
    metadata.create_all(bind=bind or engine)
    logger.info("Database tables ready")


def get_db():
    """
    Dependency that provides a database session.
    Use with FastAPI's Depends() for automatic cleanup.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
