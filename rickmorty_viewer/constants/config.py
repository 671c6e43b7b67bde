"""Runtime configuration constants."""

import os

# Remote API
API_BASE_URL = os.environ.get("RICKMORTY_API_URL", "https://rickandmortyapi.com/api/")
CHARACTERS_ENDPOINT = "character"
REQUEST_TIMEOUT_SECONDS = 30

# Placeholder values
UNKNOWN_EPISODE_NAME = "???"
UNKNOWN_FIELD_VALUE = "Unknown"
UNKNOWN_LOCATION_NAME = "???"

# Error messages surfaced to the UI
NO_CHARACTERS_MESSAGE = "No characters found"
FETCH_FAILED_MESSAGE = "Failed to fetch characters: {reason}"
FETCH_CHARACTER_FAILED_MESSAGE = "Failed to fetch character {character_id}: {reason}"
UNKNOWN_ERROR_MESSAGE = "Unknown error"

# Server
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
