"""Data access object for viewed characters."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..errors import StorageError
from ..models.viewed import ViewedCharacterModel
from ..utils.observable import Observable
from .db import ViewedCharacterRecord, create_session_factory


logger = logging.getLogger(__name__)


class ViewedCharacterDao:
    """Reads and writes rows of the ``viewed_characters`` table.

    All methods are blocking; callers on an event loop should run them in a
    worker thread.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._all_viewed: Optional[Observable[List[ViewedCharacterModel]]] = None

    @classmethod
    def from_path(cls, db_path: Union[str, Path]) -> "ViewedCharacterDao":
        return cls(create_session_factory(db_path))

    def insert_character(self, character: ViewedCharacterModel) -> ViewedCharacterModel:
        """Insert a snapshot, replacing any existing row with the same ID."""
        values = character.model_dump(exclude={"viewed_at"})
        viewed_at = character.viewed_at or datetime.now(timezone.utc)
        try:
            with self._session_factory() as session:
                record = session.merge(ViewedCharacterRecord(**values, viewed_at=viewed_at))
                session.commit()
                saved = ViewedCharacterModel.model_validate(record)
        except SQLAlchemyError as e:
            logger.error("Failed to save viewed character %s: %s", character.id, e)
            raise StorageError(f"Failed to save viewed character {character.id}: {e}") from e

        logger.info("Saved viewed character %s (%s)", saved.id, saved.name)
        if self._all_viewed is not None:
            self._all_viewed.post_value(self.get_all_viewed_characters())
        return saved

    def get_viewed_character(self, character_id: int) -> Optional[ViewedCharacterModel]:
        try:
            with self._session_factory() as session:
                record = session.get(ViewedCharacterRecord, character_id)
                return ViewedCharacterModel.model_validate(record) if record else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read viewed character {character_id}: {e}") from e

    def get_all_viewed_characters(self) -> List[ViewedCharacterModel]:
        """Return every viewed character, most recently viewed first."""
        stmt = select(ViewedCharacterRecord).order_by(
            ViewedCharacterRecord.viewed_at.desc(), ViewedCharacterRecord.id
        )
        try:
            with self._session_factory() as session:
                return [ViewedCharacterModel.model_validate(r) for r in session.scalars(stmt)]
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read viewed characters: {e}") from e

    def observe_all_viewed_characters(self) -> Observable[List[ViewedCharacterModel]]:
        """Return an observable list that is refreshed after every insert."""
        if self._all_viewed is None:
            self._all_viewed = Observable(self.get_all_viewed_characters())
        return self._all_viewed
