"""SQLAlchemy setup and ORM models for the local viewed-characters cache."""

from datetime import datetime
from pathlib import Path
from typing import Union

from sqlalchemy import DateTime, Integer, String, Text, create_engine, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from ..errors import StorageError


class Base(DeclarativeBase):
    pass


class ViewedCharacterRecord(Base):
    """ORM model for a character snapshot the user has opened.

    Columns:
        id: Integer primary key (matches upstream character ID).
        name: Character name.
        status: Life status (e.g., "Alive").
        species: Species (e.g., "Human").
        gender: Gender (e.g., "Female").
        location: Last known location name.
        origin: Origin name (e.g., "Earth (C-137)").
        first_episode_name: Name of the character's first episode.
        image_base64: Optional base64-encoded avatar snapshot.
        viewed_at: Timestamp of the last view.
    """

    __tablename__ = "viewed_characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    species: Mapped[str] = mapped_column(String(50), nullable=False)
    gender: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    origin: Mapped[str] = mapped_column(String(200), nullable=False)
    first_episode_name: Mapped[str] = mapped_column(String(200), nullable=False)
    image_base64: Mapped[str | None] = mapped_column(Text, nullable=True)
    viewed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


def create_session_factory(db_path: Union[str, Path]) -> sessionmaker:
    """Create the database file (and tables) if needed and return a session factory."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    # The DAO writes from worker threads
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        engine.dispose()
        raise StorageError(f"Failed to open database {db_path}: {e}") from e
    return sessionmaker(bind=engine, expire_on_commit=False)
