"""Character life status and its display color."""

from enum import Enum
from typing import Optional


class CharacterStatus(Enum):
    ALIVE = ("Alive", "#55CC44")
    DEAD = ("Dead", "#D63D2E")
    UNKNOWN = ("unknown", "#9E9E9E")

    def __init__(self, label: str, color: str):
        self.label = label
        self.color = color

    @classmethod
    def from_status(cls, status: Optional[str]) -> "CharacterStatus":
        """Map an API status string to a CharacterStatus (exact match, else UNKNOWN)."""
        if status == cls.ALIVE.label:
            return cls.ALIVE
        if status == cls.DEAD.label:
            return cls.DEAD
        return cls.UNKNOWN
