"""Model for a locally persisted snapshot of a viewed character."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..constants.config import UNKNOWN_FIELD_VALUE
from .character import CharacterModel


class ViewedCharacterModel(BaseModel):
    """Denormalized copy of a character the user has opened."""

    id: int = Field(..., description="Upstream character ID")
    name: str = Field(..., description="Character name")
    status: str = Field(default=UNKNOWN_FIELD_VALUE)
    species: str = Field(default=UNKNOWN_FIELD_VALUE)
    gender: str = Field(default=UNKNOWN_FIELD_VALUE)
    location: str = Field(default=UNKNOWN_FIELD_VALUE, description="Last known location name")
    origin: str = Field(default=UNKNOWN_FIELD_VALUE, description="Origin location name")
    first_episode_name: str = Field(..., description="Resolved name of the first episode")
    image_base64: Optional[str] = Field(default=None, description="Base64 snapshot of the avatar image")
    viewed_at: Optional[datetime] = Field(default=None, description="When the row was written")

    model_config = {"from_attributes": True}

    @classmethod
    def from_character(
        cls,
        character: CharacterModel,
        first_episode_name: str,
        image_base64: Optional[str] = None,
    ) -> "ViewedCharacterModel":
        """Build a snapshot from an API character, replacing missing fields with placeholders."""
        return cls(
            id=character.id,
            name=character.name,
            status=character.status or UNKNOWN_FIELD_VALUE,
            species=character.species or UNKNOWN_FIELD_VALUE,
            gender=character.gender or UNKNOWN_FIELD_VALUE,
            location=character.location.name if character.location and character.location.name else UNKNOWN_FIELD_VALUE,
            origin=character.origin.name if character.origin and character.origin.name else UNKNOWN_FIELD_VALUE,
            first_episode_name=first_episode_name,
            image_base64=image_base64,
        )
