"""Character models for data returned by the Rick and Morty API."""

from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field


class NamedResource(BaseModel):
    """A reference to another API resource (origin or location)."""
    name: str = Field(default="", description="Display name of the resource")
    url: str = Field(default="", description="API URL of the resource, empty if unknown")


class CharacterModel(BaseModel):
    """Pydantic model for a character as returned by the API."""
    id: int = Field(..., description="Upstream character ID")
    name: str = Field(..., description="Character name")
    status: Optional[str] = Field(default=None, description="Life status: Alive, Dead or unknown")
    species: Optional[str] = Field(default=None, description="Species, e.g. Human")
    type: Optional[str] = Field(default=None, description="Subspecies or type")
    gender: Optional[str] = Field(default=None, description="Gender")
    origin: Optional[NamedResource] = Field(default=None, description="Origin location reference")
    location: Optional[NamedResource] = Field(default=None, description="Last known location reference")
    image: Optional[str] = Field(default=None, description="Avatar image URL")
    episode: List[str] = Field(default_factory=list, description="Episode URLs the character appears in")
    url: Optional[str] = Field(default=None, description="API URL of this character")
    created: Optional[str] = Field(default=None, description="Creation timestamp on the API")

    @property
    def first_episode_url(self) -> Optional[str]:
        """URL of the first episode the character appears in."""
        return self.episode[0] if self.episode else None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CharacterModel":
        """Create a CharacterModel from an API JSON object."""
        return cls.model_validate(data)


class PageInfo(BaseModel):
    """Pagination metadata for list endpoints."""
    count: int = Field(default=0, description="Total number of records")
    pages: int = Field(default=0, description="Total number of pages")
    next: Optional[str] = Field(default=None, description="URL of the next page")
    prev: Optional[str] = Field(default=None, description="URL of the previous page")


class CharactersResponse(BaseModel):
    """One page of the character list endpoint."""
    info: PageInfo = Field(default_factory=PageInfo)
    characters: Optional[List[CharacterModel]] = Field(
        default=None,
        alias="results",
        description="Characters on this page, None if the payload carried none",
    )

    model_config = {"populate_by_name": True}

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CharactersResponse":
        """Create a CharactersResponse from an API JSON object."""
        return cls.model_validate(data)
