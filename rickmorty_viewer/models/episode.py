"""Episode model for data returned by the Rick and Morty API."""

from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field


class EpisodeModel(BaseModel):
    """Pydantic model for an episode."""

    id: Optional[int] = Field(default=None, description="Upstream episode ID")
    name: Optional[str] = Field(default=None, description="Episode title")
    air_date: str = Field(default="", description="Original airdate")
    episode: str = Field(default="", description="Episode code, e.g. S01E01")
    characters: List[str] = Field(
        default_factory=list,
        description="Character URLs appearing in the episode"
    )
    url: Optional[str] = Field(default=None, description="API URL of this episode")

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "EpisodeModel":
        """Create an EpisodeModel from an API JSON object."""
        return cls.model_validate(data)
