"""Fake collaborators and sample payloads shared by the test modules."""

from typing import Dict, List, Optional

from rickmorty_viewer.models.character import CharacterModel, CharactersResponse
from rickmorty_viewer.models.episode import EpisodeModel
from rickmorty_viewer.utils.observable import Observable


API = "https://rickandmortyapi.com/api"

RICK = {
    "id": 1,
    "name": "Rick Sanchez",
    "status": "Alive",
    "species": "Human",
    "type": "",
    "gender": "Male",
    "origin": {"name": "Earth (C-137)", "url": f"{API}/location/1"},
    "location": {"name": "Citadel of Ricks", "url": f"{API}/location/3"},
    "image": f"{API}/character/avatar/1.jpeg",
    "episode": [f"{API}/episode/1", f"{API}/episode/2"],
    "url": f"{API}/character/1",
    "created": "2017-11-04T18:48:46.250Z",
}

MORTY = {
    "id": 2,
    "name": "Morty Smith",
    "status": "Alive",
    "species": "Human",
    "gender": "Male",
    "origin": {"name": "unknown", "url": ""},
    "location": {"name": "Citadel of Ricks", "url": f"{API}/location/3"},
    "image": f"{API}/character/avatar/2.jpeg",
    "episode": [f"{API}/episode/1"],
}

BIRDPERSON = {
    "id": 47,
    "name": "Birdperson",
    "status": "Dead",
    "species": "Alien",
    "gender": None,
    "origin": None,
    "location": None,
    "image": None,
    "episode": [f"{API}/episode/11"],
}

PILOT = {"id": 1, "name": "Pilot", "air_date": "December 2, 2013", "episode": "S01E01"}


def character(data: dict, **overrides) -> CharacterModel:
    return CharacterModel.from_api({**data, **overrides})


def characters_page(
    results: Optional[List[dict]],
    next_page: Optional[int] = None,
    prev_page: Optional[int] = None,
) -> CharactersResponse:
    payload: dict = {
        "info": {
            "count": 826,
            "pages": 42,
            "next": f"{API}/character?page={next_page}" if next_page else None,
            "prev": f"{API}/character?page={prev_page}" if prev_page else None,
        }
    }
    if results is not None:
        payload["results"] = results
    return CharactersResponse.from_api(payload)


class FakeApi:
    """Stands in for CartoonApiClient; counts calls and replays canned answers.

    Entries in ``episodes`` / ``pages`` may be exceptions, which are raised.
    """

    def __init__(self, episodes=None, pages=None, characters=None):
        self.episodes: Dict[str, object] = dict(episodes or {})
        self.pages: Dict[int, object] = dict(pages or {})
        self.characters: Dict[int, object] = dict(characters or {})
        self.episode_calls: List[str] = []
        self.page_calls: List[int] = []

    async def get_episode(self, episode_url: str) -> EpisodeModel:
        self.episode_calls.append(episode_url)
        result = self.episodes[episode_url]
        if isinstance(result, BaseException):
            raise result
        return result

    async def get_characters(self, page: int = 1) -> CharactersResponse:
        self.page_calls.append(page)
        result = self.pages[page]
        if isinstance(result, BaseException):
            raise result
        return result

    async def get_character(self, character_id: int) -> CharacterModel:
        result = self.characters[character_id]
        if isinstance(result, BaseException):
            raise result
        return result


class FakeDao:
    """In-memory stand-in for ViewedCharacterDao."""

    def __init__(self):
        self.inserted = []
        self.observable = Observable([])

    def insert_character(self, character):
        self.inserted.append(character)
        self.observable.post_value(list(reversed(self.inserted)))
        return character

    def observe_all_viewed_characters(self):
        return self.observable


async def fake_image_loader(url):
    return f"b64:{url}"
