"""List adapter that turns characters into display rows."""

from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional

from ..constants.config import UNKNOWN_LOCATION_NAME
from ..models.character import CharacterModel
from ..viewmodels.characters import CharactersViewModel
from .status import CharacterStatus


@dataclass
class CharacterRow:
    """Display fields for one character in the list."""
    id: int
    name: str
    status: Optional[str]
    species: Optional[str]
    location: str
    first_seen: str
    status_color: str
    image_url: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DiffCallback:
    """Decides whether two list items are the same entity and whether they changed."""

    def are_items_the_same(self, old_item: CharacterModel, new_item: CharacterModel) -> bool:
        return old_item.id == new_item.id

    def are_contents_the_same(self, old_item: CharacterModel, new_item: CharacterModel) -> bool:
        return old_item == new_item


class CharactersAdapter:
    """Holds the current character list and binds items to ``CharacterRow``s."""

    def __init__(
        self,
        view_model: CharactersViewModel,
        on_item_click: Optional[Callable[[CharacterModel], None]] = None,
        diff_callback: Optional[DiffCallback] = None,
    ):
        self._view_model = view_model
        self._on_item_click = on_item_click
        self._diff = diff_callback or DiffCallback()
        self._items: List[CharacterModel] = []

    @property
    def item_count(self) -> int:
        return len(self._items)

    def get_item(self, position: int) -> Optional[CharacterModel]:
        if 0 <= position < len(self._items):
            return self._items[position]
        return None

    def submit_data(self, items: List[CharacterModel]) -> List[int]:
        """Replace the list and return the positions that were changed, inserted or removed."""
        old_items = self._items
        changed: List[int] = []
        for position, new_item in enumerate(items):
            if position >= len(old_items):
                changed.append(position)
                continue
            old_item = old_items[position]
            if not self._diff.are_items_the_same(old_item, new_item):
                changed.append(position)
            elif not self._diff.are_contents_the_same(old_item, new_item):
                changed.append(position)
        # rows past the end of the new list were removed
        changed.extend(range(len(items), len(old_items)))
        self._items = list(items)
        return changed

    def append_data(self, items: List[CharacterModel]) -> List[int]:
        """Append a newly loaded page and return the inserted positions."""
        start = len(self._items)
        self._items.extend(items)
        return list(range(start, len(self._items)))

    async def bind(self, position: int) -> CharacterRow:
        item = self._items[position]
        character_status = CharacterStatus.from_status(item.status)

        row = CharacterRow(
            id=item.id,
            name=item.name,
            status=item.status,
            species=item.species,
            location=item.location.name if item.location else UNKNOWN_LOCATION_NAME,
            first_seen="",
            status_color=character_status.color,
            image_url=item.image,
        )

        def set_first_seen(episode_name: str) -> None:
            row.first_seen = episode_name

        await self._view_model.get_episode_name_for_character(
            item.first_episode_url or "", set_first_seen
        )
        return row

    async def bind_all(self) -> List[CharacterRow]:
        return [await self.bind(position) for position in range(len(self._items))]

    def click(self, position: int) -> None:
        item = self.get_item(position)
        if item is None:
            raise IndexError(f"No item at position {position}")
        if self._on_item_click:
            self._on_item_click(item)
